# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""Bottom-up view of the per-script timings produced by the trace processor.

The input is the javascript timings file the trace processor writes
(trace-parser -j):

    {"main_thread": "1234:775",
     "1234:775": {"https://example.com/app.js": {"EvaluateScript": [[12.5, 80.1], ...],
                                                 "FunctionCall": [...]}}}

Periods are [start, end] in milliseconds relative to the start of the test.
"""
import gzip
import logging
import os

import requests

# try a fast json parser if it is installed
try:
    import ujson as json
except BaseException:
    import json

GZIP_READ_TEXT = 'rt'
GZIP_MAGIC = b'\x1f\x8b'


class BottomUpNode(object):
    """One level of a bottom-up aggregation (root, URL or event name)"""
    def __init__(self, event=None):
        self.event = event
        self.self_time = 0.0
        self.total_time = 0.0
        self.children = {}

    def add_time(self, self_time, total_time):
        self.self_time += self_time
        self.total_time += total_time


class TimelineModel(object):
    """Main-thread script activity grouped for bottom-up queries"""
    def __init__(self, script_timings):
        if script_timings is None:
            script_timings = {}
        if not isinstance(script_timings, dict):
            raise ValueError('Script timings must be a JSON object')
        self.script_timings = script_timings
        self.main_thread = script_timings.get('main_thread')

    @staticmethod
    def from_file(path):
        """Load a (optionally gzipped) script timings file"""
        logging.debug("Loading script timings: %s", path)
        _, ext = os.path.splitext(path)
        if ext.lower() == '.gz':
            with gzip.open(path, GZIP_READ_TEXT) as f:
                script_timings = json.load(f)
        else:
            with open(path, 'r') as f:
                script_timings = json.load(f)
        return TimelineModel(script_timings)

    @staticmethod
    def from_url(url, session=None, timeout=30):
        """Fetch a script timings file from a results server"""
        logging.debug("Fetching script timings: %s", url)
        if session is None:
            session = requests.Session()
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
        body = response.content
        # .gz result files are served as-is, without a content encoding
        if body[:2] == GZIP_MAGIC:
            body = gzip.decompress(body)
        return TimelineModel(json.loads(body.decode('utf-8')))

    @staticmethod
    def load(trace):
        if trace.startswith('http://') or trace.startswith('https://'):
            return TimelineModel.from_url(trace)
        return TimelineModel.from_file(trace)

    def threads(self):
        """Threads to account for: the main thread if one was identified"""
        if self.main_thread is not None and \
                isinstance(self.script_timings.get(self.main_thread), dict):
            return [self.main_thread]
        return [thread for thread, scripts in self.script_timings.items()
                if thread != 'main_thread' and isinstance(scripts, dict)]

    def get_periods(self, thread):
        """Flatten one thread into a list of periods sorted outermost-first"""
        periods = []
        scripts = self.script_timings.get(thread) or {}
        for url, events in scripts.items():
            if not isinstance(events, dict):
                continue
            for name, times in events.items():
                for period in times:
                    if len(period) >= 2 and period[1] >= period[0]:
                        periods.append({'url': url,
                                        'name': name,
                                        'start': float(period[0]),
                                        'end': float(period[1]),
                                        'children': 0.0})
        periods.sort(key=lambda period: (period['start'], -period['end']))
        return periods

    def get_self_times(self, periods):
        """Subtract the time of directly nested periods from each period"""
        stack = []
        for period in periods:
            while stack and stack[-1]['end'] <= period['start']:
                stack.pop()
            if stack and period['end'] <= stack[-1]['end']:
                stack[-1]['children'] += period['end'] - period['start']
            # a partial overlap is not nesting; the overlapped stretch counts for both periods
            stack.append(period)
        for period in periods:
            elapsed = period['end'] - period['start']
            period['self'] = max(0.0, elapsed - period['children'])
        return periods

    def bottom_up_group_by(self, group_by):
        """Group self time by script URL, then by event name"""
        if group_by != 'URL':
            raise ValueError('Unsupported bottom-up grouping: {0}'.format(group_by))
        root = BottomUpNode()
        for thread in self.threads():
            periods = self.get_self_times(self.get_periods(thread))
            logging.debug("Grouping %d script periods on thread %s", len(periods), thread)
            for period in periods:
                url = period['url']
                if url not in root.children:
                    root.children[url] = BottomUpNode()
                url_node = root.children[url]
                name = period['name']
                if name not in url_node.children:
                    url_node.children[name] = BottomUpNode({'name': name, 'url': url})
                elapsed = period['end'] - period['start']
                url_node.children[name].add_time(period['self'], elapsed)
                url_node.add_time(period['self'], elapsed)
                root.add_time(period['self'], elapsed)
        return root
