# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""JavaScript boot-up time: main-thread script cost broken down by script URL"""
import logging

from .audit import Audit, MS_DISPLAY_VALUE, compute_log_normal_score, make_table_details
from .task_groups import GROUP_ID_TO_NAME, TASK_TO_GROUP, event_style


class BootupTime(Audit):
    """Time spent parsing, compiling and executing each script"""
    @classmethod
    def meta(cls):
        return {
            'id': 'bootup-time',
            'title': 'JavaScript boot-up time',
            'failureTitle': 'JavaScript boot-up time is too high',
            'scoreDisplayMode': cls.SCORING_MODES['NUMERIC'],
            'description': 'Consider reducing the time spent parsing, compiling, and executing JS. '
                           'You may find delivering smaller JS payloads helps with this. [Learn '
                           'more](https://developers.google.com/web/tools/lighthouse/audits/bootup).',
            'requiredArtifacts': ['traces'],
        }

    @classmethod
    def default_options(cls):
        # <500ms ~= 100, >2s is yellow, >3.5s is red
        return {
            'scorePODR': 600,
            'scoreMedian': 3500,
            'thresholdInMs': 50,
        }

    @staticmethod
    def get_execution_timings_by_url(timeline_model):
        """Map each script URL to the self time (ms) of each task group"""
        bottom_up_by_url = timeline_model.bottom_up_group_by('URL')
        result = {}
        for url, per_url_node in bottom_up_by_url.children.items():
            # nothing to attribute for inline/blank documents
            if not url or url == 'about:blank':
                continue
            task_groups = {}
            for per_task_node in per_url_node.children.values():
                task = event_style(per_task_node.event)
                group_name = TASK_TO_GROUP.get(task['title'], GROUP_ID_TO_NAME['other'])
                task_groups[group_name] = task_groups.get(group_name, 0) + \
                    (per_task_node.self_time or 0)
            result[url] = task_groups
        return result

    @classmethod
    def audit(cls, artifacts, context):
        settings = context.get('settings') or {}
        options = cls.options(context.get('options'))
        trace = artifacts.traces[cls.DEFAULT_PASS]
        timeline_model = artifacts.request_devtools_timeline_model(trace)
        execution_timings = cls.get_execution_timings_by_url(timeline_model)
        total_bootup_time = 0
        extended_info = {}

        headings = [
            {'key': 'url', 'itemType': 'url', 'text': 'URL'},
            {'key': 'scripting', 'granularity': 1, 'itemType': 'ms',
             'text': GROUP_ID_TO_NAME['scripting']},
            {'key': 'scriptParseCompile', 'granularity': 1, 'itemType': 'ms',
             'text': GROUP_ID_TO_NAME['scriptParseCompile']},
        ]

        multiplier = 1
        if settings.get('throttlingMethod') == 'simulate':
            multiplier = settings['throttling']['cpuSlowdownMultiplier']

        results = []
        for url, groups in execution_timings.items():
            for name, value in groups.items():
                groups[name] = value * multiplier
                total_bootup_time += value * multiplier
            extended_info[url] = groups

            scripting_total = groups.get(GROUP_ID_TO_NAME['scripting'], 0)
            parse_compile_total = groups.get(GROUP_ID_TO_NAME['scriptParseCompile'], 0)
            # Only the javascript costs are reported per script
            results.append({
                'url': url,
                'sum': scripting_total + parse_compile_total,
                'scripting': scripting_total,
                'scriptParseCompile': parse_compile_total,
            })
        results = [result for result in results if result['sum'] >= options['thresholdInMs']]
        results.sort(key=lambda result: result['sum'], reverse=True)
        logging.debug("Boot-up time %0.1fms across %d scripts (%d over %dms)",
                      total_bootup_time, len(execution_timings), len(results),
                      options['thresholdInMs'])

        summary = {'wastedMs': total_bootup_time}
        details = make_table_details(headings, results, summary)

        score = compute_log_normal_score(total_bootup_time,
                                         options['scorePODR'],
                                         options['scoreMedian'])

        return {
            'score': score,
            'rawValue': total_bootup_time,
            'displayValue': [MS_DISPLAY_VALUE, total_bootup_time],
            'details': details,
            'extendedInfo': {
                'value': extended_info,
            },
        }
