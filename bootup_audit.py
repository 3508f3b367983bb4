#!/usr/bin/env python
# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""Run the JavaScript boot-up time audit against a script timings file"""
import gzip
import logging
import logging.handlers
import os
import sys
import time
try:
    import ujson as json
except BaseException:
    import json

from bootup import config
from bootup.artifacts import Artifacts
from bootup.audit import format_display_value
from bootup.bootup_time import BootupTime

GZIP_TEXT = 'wt'


def write_json(out_file, json_data):
    """Write out the audit result as a json blob, False if it could not be written"""
    try:
        _, ext = os.path.splitext(out_file)
        if ext.lower() == '.gz':
            with gzip.open(out_file, GZIP_TEXT, 7) as f:
                json.dump(json_data, f)
        else:
            with open(out_file, 'w') as f:
                json.dump(json_data, f)
    except BaseException:
        logging.exception("Error writing to " + out_file)
        return False
    return True


def build_settings(options, run_config):
    """Config file settings with any command-line overrides applied"""
    overrides = config.merge({}, run_config.get('settings'))
    if options.throttling:
        overrides['throttlingMethod'] = options.throttling
    if options.cpu_slowdown is not None:
        if 'throttling' not in overrides:
            overrides['throttling'] = {}
        overrides['throttling']['cpuSlowdownMultiplier'] = options.cpu_slowdown
    return config.merge_settings(overrides)


def build_audit_options(options, run_config):
    audit_options = config.get_audit_options(run_config, BootupTime.meta()['id'])
    if options.threshold is not None:
        audit_options['thresholdInMs'] = options.threshold
    return BootupTime.options(audit_options)


def run_audit(trace, settings, audit_options):
    artifacts = Artifacts.from_trace(trace)
    context = {'settings': settings, 'options': audit_options}
    return BootupTime.audit(artifacts, context)


def main():
    """Main entry point"""
    import argparse
    parser = argparse.ArgumentParser(description='JavaScript boot-up time audit.',
                                     prog='bootup-audit')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="Increase verbosity (specify multiple times for more). "
                             "-vvvv for full debug output.")
    parser.add_argument('-j', '--js',
                        help="Input Javascript per-script timings file or URL (from trace-parser -j).")
    parser.add_argument('-o', '--out', help="Output audit result json file (stdout if omitted).")
    parser.add_argument('-c', '--config', help="Settings and audit options json file (optional).")
    parser.add_argument('--throttling', choices=config.THROTTLING_METHODS,
                        help="Throttling method the timings were collected with.")
    parser.add_argument('--cpuslowdown', dest='cpu_slowdown', type=float,
                        help="CPU slowdown multiplier applied when simulating.")
    parser.add_argument('--threshold', type=float,
                        help="Minimum per-script time (ms) to include in the table.")
    parser.add_argument('--log', help="Log critical errors to the given file.")
    options, _ = parser.parse_known_args()

    # Set up logging
    log_level = logging.CRITICAL
    if options.verbose == 1:
        log_level = logging.ERROR
    elif options.verbose == 2:
        log_level = logging.WARNING
    elif options.verbose == 3:
        log_level = logging.INFO
    elif options.verbose >= 4:
        log_level = logging.DEBUG
    logging.basicConfig(
        level=log_level, format="%(asctime)s.%(msecs)03d - %(message)s", datefmt="%H:%M:%S")

    if options.log:
        err_log = logging.handlers.RotatingFileHandler(options.log, maxBytes=1000000,
                                                       backupCount=5, delay=True)
        err_log.setLevel(logging.ERROR)
        logging.getLogger().addHandler(err_log)

    if not options.js:
        parser.error("Input script timings file is not specified.")

    start = time.time()
    try:
        run_config = config.load_config(options.config)
        settings = build_settings(options, run_config)
        audit_options = build_audit_options(options, run_config)
        result = run_audit(options.js, settings, audit_options)
    except Exception:
        logging.exception("Error running the boot-up time audit on " + options.js)
        sys.exit(1)

    logging.info("JavaScript boot-up time: %s (score %0.2f)",
                 format_display_value(result['displayValue']).strip(), result['score'])
    if options.out:
        if not write_json(options.out, result):
            sys.exit(1)
    else:
        print(json.dumps(result))

    end = time.time()
    elapsed = end - start
    logging.debug("Elapsed Time: {0:0.4f}".format(elapsed))


if '__main__' == __name__:
    main()
