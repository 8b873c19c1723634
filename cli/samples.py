"""
Motion sample input
Accepts "x,y,t" lines or JSON objects {"x": .., "y": .., "t": ..}
"""

import json

from rdmpass.errors import InvalidSample
from rdmpass.services.collector import CollectorState


def parse_sample(line):
    """Parse one input line into an (x, y, t) tuple, or None for blank/comment lines"""
    line = line.strip()
    if not line or line.startswith('#'):
        return None

    if line.startswith('{'):
        try:
            data = json.loads(line)
            return float(data['x']), float(data['y']), float(data['t'])
        except (ValueError, KeyError, TypeError):
            raise InvalidSample(f"Malformed sample: {line[:40]}")

    parts = [p.strip() for p in line.split(',')]
    if len(parts) != 3:
        raise InvalidSample(f"Expected x,y,t but got: {line[:40]}")
    try:
        return float(parts[0]), float(parts[1]), float(parts[2])
    except ValueError:
        raise InvalidSample(f"Malformed sample: {line[:40]}")


def feed_collector(collector, lines):
    """Feed lines into a started collector until it stops collecting"""
    for line in lines:
        sample = parse_sample(line)
        if sample is None:
            continue
        if collector.record(*sample) != CollectorState.COLLECTING:
            break
    return collector.state
