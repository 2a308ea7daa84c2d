import sys
import threading

import pytest

from ranxoshi256 import config
from ranxoshi256.attacker.recover import MIN_SAMPLES, predict_next
from ranxoshi256.oracle import app as oracle_app
from ranxoshi256.oracle.app import DEFAULT_SEED, create_app, derive_seed
from ranxoshi256.xoshiro256 import Ranxoshi256

SEED = bytes(range(32))


@pytest.fixture
def client():
    app = create_app(seed=SEED, stream_index=0, output_mode='raw')
    app.config['TESTING'] = True
    return app.test_client()


def test_get_output_raw_matches_generator(client):
    ref = Ranxoshi256(SEED)
    for _ in range(3):
        resp = client.get('/get_output')
        assert resp.status_code == 200
        assert resp.get_json()['output'] == format(ref.next_raw(), '016x')


@pytest.mark.parametrize("kind,upper_inclusive", [
    ('float_co', False),
    ('float_cc', True),
    ('double_co', False),
    ('double_cc', True),
])
def test_get_output_float_kinds(client, kind, upper_inclusive):
    for _ in range(20):
        resp = client.get('/get_output', query_string={'kind': kind})
        assert resp.status_code == 200
        val = resp.get_json()['output']
        assert 0.0 <= val <= 1.0
        if not upper_inclusive:
            assert val < 1.0


def test_get_output_double_co_value(client):
    ref = Ranxoshi256(SEED)
    resp = client.get('/get_output', query_string={'kind': 'double_co'})
    assert resp.get_json()['output'] == ref.double_co()


def test_get_output_unknown_kind(client):
    resp = client.get('/get_output', query_string={'kind': 'normal'})
    assert resp.status_code == 400
    assert resp.get_json()['ok'] is False


def test_output_mode_sets_default_kind():
    app = create_app(seed=SEED, stream_index=0, output_mode='double_cc')
    resp = app.test_client().get('/get_output')
    assert resp.get_json()['output'] == Ranxoshi256(SEED).double_cc()


def test_validate(client):
    ref = Ranxoshi256(SEED)
    good = format(ref.next_raw(), '016x')
    resp = client.post('/validate', json={'candidate': good})
    assert resp.get_json() == {'ok': True, 'expected': good}
    resp = client.post('/validate', json={'candidate': '0'})
    body = resp.get_json()
    assert body['ok'] is False
    assert body['expected'] == format(ref.next_raw(), '016x')


@pytest.mark.parametrize("payload", [{}, {'other': 1}, {'candidate': 'zz'}, {'candidate': 12}])
def test_validate_bad_input(client, payload):
    resp = client.post('/validate', json=payload)
    assert resp.status_code == 400
    assert resp.get_json()['ok'] is False


def test_jump_endpoint(client):
    resp = client.post('/jump')
    assert resp.get_json() == {'ok': True}
    ref = Ranxoshi256(SEED)
    ref.jump()
    assert client.get('/get_output').get_json()['output'] == format(ref.next_raw(), '016x')


def test_stream_index_jumps_at_startup():
    app = create_app(seed=SEED, stream_index=2, output_mode='raw')
    ref = Ranxoshi256(SEED)
    ref.jump()
    ref.jump()
    assert app.test_client().get('/get_output').get_json()['output'] == format(ref.next_raw(), '016x')


def test_derive_seed_fixed_from_config(monkeypatch):
    monkeypatch.setattr(config, 'SEED_MODE', 'fixed')
    monkeypatch.setattr(config, 'SEED', 'ff' * 32)
    assert derive_seed() == b'\xff' * 32


def test_derive_seed_default_when_unset(monkeypatch):
    monkeypatch.setattr(config, 'SEED_MODE', 'fixed')
    monkeypatch.setattr(config, 'SEED', None)
    assert derive_seed() == DEFAULT_SEED


def test_derive_seed_unknown_mode_falls_back(monkeypatch, caplog):
    monkeypatch.setattr(config, 'SEED_MODE', 'random')
    with caplog.at_level('WARNING', logger='oracle'):
        assert derive_seed() == DEFAULT_SEED
    assert "Unknown SEED_MODE" in caplog.text


def test_create_app_uses_config(monkeypatch):
    monkeypatch.setattr(config, 'SEED_MODE', 'fixed')
    monkeypatch.setattr(config, 'SEED', SEED.hex())
    monkeypatch.setattr(config, 'STREAM_INDEX', 0)
    monkeypatch.setattr(config, 'OUTPUT_MODE', 'raw')
    app = oracle_app.create_app()
    assert app.config['RNG'] == Ranxoshi256(SEED)


def test_attack_against_oracle(client):
    obs = [int(client.get('/get_output').get_json()['output'], 16) for _ in range(MIN_SAMPLES)]
    predicted = predict_next(obs)
    resp = client.post('/validate', json={'candidate': format(predicted, '016x')})
    assert resp.get_json()['ok'] is True


def test_concurrent_draws_match_sequential_stream():
    app = create_app(seed=SEED, stream_index=0, output_mode='raw')
    threads, per_thread = 8, 200
    results = [[] for _ in range(threads)]

    def worker(k):
        c = app.test_client()
        for _ in range(per_thread):
            results[k].append(int(c.get('/get_output').get_json()['output'], 16))

    old_interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        workers = [threading.Thread(target=worker, args=(k,)) for k in range(threads)]
        for t in workers:
            t.start()
        for t in workers:
            t.join()
    finally:
        sys.setswitchinterval(old_interval)

    ref = Ranxoshi256(SEED)
    expected = [ref.next_raw() for _ in range(threads * per_thread)]
    served = [w for r in results for w in r]
    assert sorted(served) == sorted(expected)
    assert app.config['RNG'] == ref
    # every thread sees its own draws in stream order
    position = {w: i for i, w in enumerate(expected)}
    for r in results:
        order = [position[w] for w in r]
        assert order == sorted(order)
