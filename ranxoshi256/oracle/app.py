# ranxoshi256/oracle/app.py
# Flask oracle exposing /get_output, /validate and /jump over one xoshiro256** generator
# Supports SEED_MODE = 'fixed' and STREAM_INDEX jumps at startup

import logging
import threading

from flask import Flask, jsonify, request

from ranxoshi256 import config
from ranxoshi256.xoshiro256 import Ranxoshi256, SEED_BYTES

logger = logging.getLogger('oracle')

DEFAULT_SEED = bytes(range(SEED_BYTES))

OUTPUT_KINDS = {
    'raw': Ranxoshi256.next_raw,
    'float_co': Ranxoshi256.float_co,
    'float_cc': Ranxoshi256.float_cc,
    'double_co': Ranxoshi256.double_co,
    'double_cc': Ranxoshi256.double_cc,
}


def derive_seed():
    """
    Derive the 32-byte seed according to config.SEED_MODE.
      - 'fixed' with config.SEED set -> those bytes (64 hex digits)
      - 'fixed' with config.SEED None -> DEFAULT_SEED
      - anything else -> DEFAULT_SEED, with a warning
    """
    mode = (config.SEED_MODE or 'fixed').lower()
    if mode == 'fixed':
        if config.SEED is not None:
            seed = bytes.fromhex(config.SEED)
            logger.info(f"Using fixed SEED from config: {seed.hex()}")
            return seed
        logger.info(f"Using default fixed SEED: {DEFAULT_SEED.hex()}")
        return DEFAULT_SEED
    logger.warning(f"Unknown SEED_MODE '{config.SEED_MODE}', falling back to default SEED: {DEFAULT_SEED.hex()}")
    return DEFAULT_SEED


def create_app(seed=None, stream_index=None, output_mode=None):
    app = Flask(__name__)

    if seed is None:
        seed = derive_seed()
    if stream_index is None:
        stream_index = config.STREAM_INDEX
    if output_mode is None:
        output_mode = config.OUTPUT_MODE

    rng = Ranxoshi256(seed)
    for _ in range(stream_index):
        rng.jump()
    if stream_index:
        logger.info(f"Jumped generator to stream {stream_index}")
    app.config['RNG'] = rng
    # one generator state shared by all request threads
    lock = threading.Lock()

    @app.route('/get_output', methods=['GET'])
    def get_output():
        kind = request.args.get('kind', output_mode)
        draw = OUTPUT_KINDS.get(kind)
        if draw is None:
            return jsonify({'ok': False, 'reason': f'unknown kind {kind!r}'}), 400
        with lock:
            val = draw(rng)
        if kind == 'raw':
            return jsonify({'output': format(val, '016x')})
        return jsonify({'output': float(val)})

    @app.route('/validate', methods=['POST'])
    def validate():
        data = request.get_json(silent=True)
        if not data or 'candidate' not in data:
            return jsonify({'ok': False, 'reason': 'need candidate'}), 400
        try:
            candidate = int(data['candidate'], 16)
        except (TypeError, ValueError):
            return jsonify({'ok': False, 'reason': 'bad hex'}), 400
        with lock:
            expected = rng.next_raw()
        return jsonify({'ok': candidate == expected, 'expected': format(expected, '016x')})

    @app.route('/jump', methods=['POST'])
    def jump():
        with lock:
            rng.jump()
        logger.info("Generator jumped by 2^128 steps")
        return jsonify({'ok': True})

    return app


if __name__ == '__main__':
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    app = create_app()
    logger.info(f"Starting oracle at http://{config.HOST}:{config.PORT} with SEED_MODE={config.SEED_MODE}")
    app.run(host=config.HOST, port=config.PORT, debug=False)
