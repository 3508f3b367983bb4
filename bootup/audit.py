# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""Shared plumbing for audits: scoring, result tables and option handling"""
import copy
import math

SCORING_MODES = {
    'NUMERIC': 'numeric',
    'BINARY': 'binary',
    'MANUAL': 'manual',
    'INFORMATIVE': 'informative',
    'NOT_APPLICABLE': 'not-applicable',
    'ERROR': 'error',
}

DEFAULT_PASS = 'defaultPass'

# Formatted with the raw millisecond value, e.g. "      1234\xa0ms"
MS_DISPLAY_VALUE = '%10d\xa0ms'


def clamp_to_2_decimals(value):
    """Round half-up to 2 decimal places"""
    return math.floor(value * 100 + 0.5) / 100


def compute_log_normal_score(measured_value, diminishing_returns_value, median_value):
    """Score a measurement against a log-normal curve.

    The median value scores 0.5 and values at or below the point of
    diminishing returns (PODR) score close to 1. Returns a value in [0, 1]
    rounded to 2 decimals.
    """
    if measured_value <= 0:
        return 1.0
    location = math.log(median_value)
    log_ratio = math.log(float(diminishing_returns_value) / float(median_value))
    shape = math.sqrt(1 - 3 * log_ratio - math.sqrt((log_ratio - 3) * (log_ratio - 3) - 8)) / 2
    standardized = (math.log(measured_value) - location) / (math.sqrt(2) * shape)
    score = (1 - math.erf(standardized)) / 2
    score = max(0.0, min(1.0, score))
    return clamp_to_2_decimals(score)


def make_table_details(headings, items, summary=None):
    if not items:
        return {'type': 'table', 'headings': [], 'items': [], 'summary': summary}
    return {'type': 'table', 'headings': headings, 'items': items, 'summary': summary}


def format_display_value(display_value):
    """Expand a [format, value, ...] display value into a string"""
    if isinstance(display_value, (list, tuple)):
        if not display_value:
            return ''
        return display_value[0] % tuple(display_value[1:])
    return '' if display_value is None else str(display_value)


class Audit(object):
    """Base class for audits run against the collected artifacts"""
    DEFAULT_PASS = DEFAULT_PASS
    SCORING_MODES = SCORING_MODES

    @classmethod
    def meta(cls):
        raise NotImplementedError('{0} must provide meta()'.format(cls.__name__))

    @classmethod
    def default_options(cls):
        return {}

    @classmethod
    def options(cls, overrides=None):
        """Default options with any caller-provided values layered on top"""
        options = copy.deepcopy(cls.default_options())
        if overrides:
            options.update(overrides)
        return options

    @classmethod
    def audit(cls, artifacts, context):
        raise NotImplementedError('{0} must provide audit()'.format(cls.__name__))
