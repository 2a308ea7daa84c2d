# ranxoshi256/attacker/recover.py
# Query the oracle for raw outputs, undo the ** scrambler to get s1 at each step,
# build a linear system over GF(2) for the 256-bit initial state, solve it,
# then predict the next output and validate it via /validate.

import argparse
import time

import requests

from ranxoshi256 import config
from ranxoshi256.linear import BITS, WORD, identity, symbolic_step, unpack_state
from ranxoshi256.xoshiro256 import MASK64, Ranxoshi256, rotl

ORACLE = f'http://{config.HOST}:{config.PORT}'

# 4 outputs pin down s1, s0^s2, s0^s3 and finally s0 itself
MIN_SAMPLES = 4

INV9 = pow(9, -1, 1 << 64)
INV5 = pow(5, -1, 1 << 64)


def unscramble(word):
    # inverse of rotl(s1 * 5, 7) * 9
    x = (word * INV9) & MASK64
    x = rotl(x, 64 - 7)
    return (x * INV5) & MASK64


def build_maps(steps):
    # maps[t][b] is the mask of initial state bits that bit b of s1 depends on at step t
    state_coeffs = identity()
    maps = []
    for step in range(steps):
        maps.append(state_coeffs[WORD:2 * WORD])
        state_coeffs = symbolic_step(state_coeffs)
    return maps


def construct_equations(observed):
    maps = build_maps(len(observed))
    rows = []
    rhs = []
    for t, out in enumerate(observed):
        s1 = unscramble(out)
        for b in range(WORD):
            mask = maps[t][b]
            if mask == 0:
                continue
            rows.append(mask)
            rhs.append((s1 >> b) & 1)
    return rows, rhs


def solve_gf2(rows, rhs, bits=BITS):
    """
    Solve rows . x = rhs over GF(2); rows are integer masks of <= bits bits.
    Each equation is reduced against a basis keyed by its leading bit.
    Returns None when the system is inconsistent or leaves a bit undetermined.
    """
    basis = {}
    for mask, val in zip(rows, rhs):
        while mask:
            lead = mask.bit_length() - 1
            if lead not in basis:
                basis[lead] = (mask, val)
                break
            bmask, bval = basis[lead]
            mask ^= bmask
            val ^= bval
        else:
            if val:
                # reduced to 0 = 1
                return None
    if len(basis) < bits:
        return None
    # every lower bit of a basis row is itself a lead, so solve upwards
    sol = 0
    for lead in sorted(basis):
        mask, val = basis[lead]
        if (bin(mask & sol).count('1') & 1) ^ val:
            sol |= 1 << lead
    return sol


def recover_state(observed):
    """
    Recover the generator state positioned at observed[0].
    Returns None if fewer than MIN_SAMPLES outputs are given or the system has no unique solution.
    """
    if len(observed) < MIN_SAMPLES:
        return None
    rows, rhs = construct_equations(observed)
    sol = solve_gf2(rows, rhs)
    if sol is None:
        return None
    return Ranxoshi256.from_words(unpack_state(sol))


def predict_from(gen, steps):
    # output after `steps` draws from gen, leaving gen untouched
    ahead = gen.copy()
    for _ in range(steps):
        ahead.next_raw()
    return ahead.peek_next()


def predict_next(observed):
    gen = recover_state(observed)
    if gen is None:
        return None
    return predict_from(gen, len(observed))


def query_oracle(n, oracle=ORACLE):
    outs = []
    for _ in range(n):
        r = requests.get(oracle + '/get_output', params={'kind': 'raw'}, timeout=5)
        r.raise_for_status()
        outs.append(int(r.json()['output'], 16))
    return outs


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--samples', type=int, default=MIN_SAMPLES, help='number of raw outputs to collect')
    parser.add_argument('--oracle', default=ORACLE, help='oracle base URL')
    args = parser.parse_args()

    t0 = time.time()
    print(f"[attacker] Querying oracle for {args.samples} outputs...")
    obs = query_oracle(args.samples, args.oracle)
    for i, o in enumerate(obs):
        print(f" obs[{i}]: {o:016x}")
    print(f"[attacker] Solving {WORD * len(obs)} linear equations over GF(2)...")
    gen = recover_state(obs)
    if gen is None:
        print(f"[attacker] Failed to find unique solution. Collect at least {MIN_SAMPLES} outputs.")
    else:
        print("[attacker] Recovered initial 256-bit state:")
        print(' ' + ' '.join(f'{w:016x}' for w in gen.words()))
        predicted = predict_from(gen, len(obs))
        print(f"[attacker] Predicted next output: {predicted:016x}")
        resp = requests.post(args.oracle + '/validate', json={'candidate': f'{predicted:016x}'}, timeout=5)
        print("[attacker] Validate response:", resp.json())
    print(f"[attacker] Done in {time.time()-t0:.2f}s")


if __name__ == '__main__':
    main()
