# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""Run settings and per-audit options"""
import copy
import gzip
import logging
import os

# try a fast json parser if it is installed
try:
    import ujson as json
except BaseException:
    import json

GZIP_READ_TEXT = 'rt'

THROTTLING_METHODS = ['simulate', 'devtools', 'provided']

# Simulated mobile 3G with a 4x slower CPU
DEFAULT_SETTINGS = {
    'throttlingMethod': 'simulate',
    'throttling': {
        'rttMs': 150,
        'throughputKbps': 1638.4,
        'cpuSlowdownMultiplier': 4,
    },
}


def merge(base, overrides):
    """Recursively merge overrides into a copy of base"""
    out = copy.deepcopy(base)
    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(out.get(key), dict):
                out[key] = merge(out[key], value)
            else:
                out[key] = copy.deepcopy(value)
    return out


def merge_settings(overrides=None):
    settings = merge(DEFAULT_SETTINGS, overrides)
    if settings['throttlingMethod'] not in THROTTLING_METHODS:
        raise ValueError('Unknown throttling method: {0}'.format(settings['throttlingMethod']))
    return settings


def load_config(path):
    """Load a json config file ({"settings": {...}, "audits": {...}})"""
    if path is None:
        return {}
    logging.debug("Loading config: %s", path)
    _, ext = os.path.splitext(path)
    if ext.lower() == '.gz':
        with gzip.open(path, GZIP_READ_TEXT) as f:
            config = json.load(f)
    else:
        with open(path, 'r') as f:
            config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError('Config must be a JSON object: {0}'.format(path))
    return config


def get_audit_options(config, audit_id):
    """Options configured for a single audit, if any"""
    audits = config.get('audits') or {}
    audit_config = audits.get(audit_id) or {}
    return dict(audit_config.get('options') or {})
