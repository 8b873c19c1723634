"""
Command-line client: collects motion samples, reduces them to a seed and
asks the server (or the local deriver) for a password.

Raw samples never leave this process; only the 32-byte seed is sent.
"""

import base64
import os
import sys

import httpx

from rdmpass.errors import GenerationError, InvalidSample
from rdmpass.schemas.generate import PasswordSettings
from rdmpass.security_limits import DEFAULT_REQUIRED_MOVES, MAX_REQUIRED_MOVES, MIN_REQUIRED_MOVES
from rdmpass.services.collector import CollectorState, MotionCollector
from rdmpass.services.generator import derive_password

from prompts import SettingsPrompts
from samples import feed_collector

DEFAULT_SERVER = "http://localhost:8000"
USAGE = "Usage: python cli/main.py generate [SAMPLES_FILE] [--local] [--server=URL] [--moves=N]"


def parse_args(argv):
    """Split argv into a samples path and option flags"""
    options = {'local': False, 'server': os.getenv("RDMPASS_SERVER", DEFAULT_SERVER), 'moves': None}
    path = None
    for arg in argv:
        if arg == '--local':
            options['local'] = True
        elif arg.startswith('--server='):
            options['server'] = arg.split('=', 1)[1]
        elif arg.startswith('--moves='):
            options['moves'] = int(arg.split('=', 1)[1])
        elif arg.startswith('--'):
            raise ValueError(f"Unknown option {arg}")
        elif path is None:
            path = arg
        else:
            raise ValueError("Only one samples file may be given")
    return path, options


def collect_seed(lines, required_moves):
    """Run one collection session over lines; returns the seed or None"""
    collector = MotionCollector(required_moves)
    collector.start()
    try:
        state = feed_collector(collector, lines)
    except InvalidSample as e:
        print(f"[RDMPASS] ERROR: Collection aborted - {e}")
        return None

    if state != CollectorState.SEED_READY:
        print(f"[RDMPASS] ERROR: Only {collector.count} of {required_moves} movements supplied")
        return None

    print(f"[RDMPASS] Collected {required_moves} movements.")
    return collector.take_seed()


def request_password(server, seed, settings):
    """POST the seed and settings to /generate; returns (password, error)"""
    body = {
        'entropy': base64.b64encode(seed).decode('ascii'),
        'settings': settings,
    }
    try:
        response = httpx.post(f"{server.rstrip('/')}/generate", json=body, timeout=10.0)
    except httpx.HTTPError as e:
        return None, f"Request failed: {type(e).__name__}"

    try:
        data = response.json()
    except ValueError:
        return None, f"Unexpected response ({response.status_code})"

    if response.status_code != 200:
        return None, data.get('error', 'Request failed')
    if 'password' not in data:
        return None, "Invalid response from server"
    return data['password'], None


def derive_locally(seed, settings):
    """Derive in-process with the same boundary rules as the server"""
    snapshot = PasswordSettings.model_validate(settings).to_generation_settings()
    try:
        return derive_password(seed, snapshot), None
    except GenerationError as e:
        return None, str(e)


def main():
    """Main entry point"""
    if len(sys.argv) < 2 or sys.argv[1] != 'generate':
        print(USAGE)
        sys.exit(1)

    try:
        path, options = parse_args(sys.argv[2:])
    except ValueError as e:
        print(f"[RDMPASS] ERROR: {e}")
        print(USAGE)
        sys.exit(1)

    prompts = SettingsPrompts()
    required_moves = options['moves']
    if required_moves is None:
        # Piped samples occupy stdin, so only prompt on a terminal
        required_moves = prompts.prompt_required_moves() if sys.stdin.isatty() else DEFAULT_REQUIRED_MOVES
    if not MIN_REQUIRED_MOVES <= required_moves <= MAX_REQUIRED_MOVES:
        print(f"[RDMPASS] ERROR: --moves must be between {MIN_REQUIRED_MOVES} and {MAX_REQUIRED_MOVES}")
        sys.exit(1)

    # Step 1: Collect entropy
    print("[RDMPASS] Reading movements...")
    if path:
        with open(path, 'r') as f:
            seed = collect_seed(f, required_moves)
    else:
        seed = collect_seed(sys.stdin, required_moves)
    if seed is None:
        sys.exit(1)

    # Step 2: Configure password (stdin may be consumed, so prompts need a terminal)
    if not path and not sys.stdin.isatty():
        settings = PasswordSettings().model_dump(by_alias=True)
        settings.update(includeLowercase=True, includeUppercase=True, includeNumbers=True, includeSymbols=True)
    else:
        settings = prompts.collect_all()

    # Step 3: Generate
    if options['local']:
        password, error = derive_locally(seed, settings)
    else:
        print(f"[RDMPASS] Requesting password from {options['server']}...")
        password, error = request_password(options['server'], seed, settings)
    # The seed is single-use.
    del seed

    if error:
        print(f"[RDMPASS] ERROR: {error}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(password)
    print("=" * 60)


if __name__ == '__main__':
    main()
