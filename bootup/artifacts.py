# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""Artifacts handed to audits"""
import logging

from .audit import DEFAULT_PASS
from .timeline_model import TimelineModel


class Artifacts(object):
    """Collected traces plus the models computed from them"""
    def __init__(self, traces=None, model_loader=None):
        self.traces = traces if traces is not None else {}
        self.model_loader = model_loader if model_loader is not None else TimelineModel.load
        self.timeline_models = {}

    @staticmethod
    def from_trace(trace, pass_name=DEFAULT_PASS):
        return Artifacts({pass_name: trace})

    def request_devtools_timeline_model(self, trace):
        """Build the timeline model for a trace, once per trace"""
        if trace not in self.timeline_models:
            logging.debug("Building timeline model for %s", trace)
            self.timeline_models[trace] = self.model_loader(trace)
        return self.timeline_models[trace]
