import os

import pytest

from .artifacts import Artifacts
from .audit import MS_DISPLAY_VALUE
from .bootup_time import BootupTime
from .timeline_model import BottomUpNode, TimelineModel

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'test', 'data')
TIMINGS = os.path.join(DATA_DIR, 'script_timings.json')

APP = 'https://example.com/app.js'
VENDOR = 'https://cdn.example.com/vendor.js'
WIDGET = 'https://example.com/widget.js'


class FakeModel(object):
    def __init__(self, root):
        self.root = root
        self.groupings = []

    def bottom_up_group_by(self, group_by):
        self.groupings.append(group_by)
        return self.root


def make_model(timings):
    """{url: [(event name, self time), ...]} -> fake bottom-up model"""
    root = BottomUpNode()
    for url, tasks in timings.items():
        url_node = BottomUpNode()
        for name, self_time in tasks:
            task_node = BottomUpNode({'name': name, 'url': url})
            task_node.self_time = self_time
            url_node.children[name] = task_node
        root.children[url] = url_node
    return FakeModel(root)


def run(settings=None, options=None, trace=TIMINGS):
    artifacts = Artifacts.from_trace(trace)
    return BootupTime.audit(artifacts, {'settings': settings, 'options': options})


def test_meta():
    meta = BootupTime.meta()
    assert meta['id'] == 'bootup-time'
    assert meta['title'] == 'JavaScript boot-up time'
    assert meta['failureTitle'] == 'JavaScript boot-up time is too high'
    assert meta['scoreDisplayMode'] == 'numeric'
    assert meta['requiredArtifacts'] == ['traces']
    assert BootupTime.default_options() == {'scorePODR': 600, 'scoreMedian': 3500,
                                            'thresholdInMs': 50}


def test_execution_timings_by_url():
    model = make_model({
        APP: [('EvaluateScript', 30.0), ('FunctionCall', 12.5), ('v8.compile', 4.0),
              ('v8.parseOnBackground', 1.0), ('Layout', 3.0), ('Mystery', 2.0)],
        '': [('EvaluateScript', 100.0)],
        'about:blank': [('FunctionCall', 100.0)],
    })
    timings = BootupTime.get_execution_timings_by_url(model)
    assert model.groupings == ['URL']
    assert list(timings) == [APP]
    assert timings[APP] == {'Script Evaluation': 42.5,
                            'Script Parsing & Compile': 5.0,
                            'Style & Layout': 3.0,
                            'Other': 2.0}


def test_missing_self_time_counts_as_zero():
    model = make_model({APP: [('EvaluateScript', None), ('FunctionCall', 7.0)]})
    timings = BootupTime.get_execution_timings_by_url(model)
    assert timings[APP] == {'Script Evaluation': 7.0}


def test_audit_unthrottled():
    result = run({'throttlingMethod': 'devtools'})
    assert result['rawValue'] == 240.0
    assert result['score'] == 1.0
    assert result['displayValue'] == [MS_DISPLAY_VALUE, 240.0]
    details = result['details']
    assert details['type'] == 'table'
    assert [heading['key'] for heading in details['headings']] == \
        ['url', 'scripting', 'scriptParseCompile']
    assert details['headings'][1]['text'] == 'Script Evaluation'
    assert details['headings'][2]['text'] == 'Script Parsing & Compile'
    assert details['summary'] == {'wastedMs': 240.0}
    # vendor.js is under the 50ms threshold
    assert details['items'] == [
        {'url': WIDGET, 'sum': 105.0, 'scripting': 100.0, 'scriptParseCompile': 5.0},
        {'url': APP, 'sum': 100.0, 'scripting': 80.0, 'scriptParseCompile': 20.0},
    ]
    assert result['extendedInfo']['value'] == {
        APP: {'Script Evaluation': 80.0, 'Script Parsing & Compile': 20.0},
        VENDOR: {'Script Evaluation': 20.0, 'Script Parsing & Compile': 10.0},
        WIDGET: {'Script Parsing & Compile': 5.0, 'Garbage collection': 5.0,
                 'Script Evaluation': 100.0},
    }


def test_audit_simulated_cpu_slowdown():
    result = run({'throttlingMethod': 'simulate',
                  'throttling': {'cpuSlowdownMultiplier': 4}})
    assert result['rawValue'] == 960.0
    assert 0.9 < result['score'] < 1.0
    assert [item['url'] for item in result['details']['items']] == [WIDGET, APP, VENDOR]
    assert result['details']['items'][2] == {
        'url': VENDOR, 'sum': 120.0, 'scripting': 80.0, 'scriptParseCompile': 40.0}
    assert result['extendedInfo']['value'][WIDGET]['Garbage collection'] == 20.0


def test_multiplier_only_when_simulating():
    result = run({'throttlingMethod': 'provided',
                  'throttling': {'cpuSlowdownMultiplier': 4}})
    assert result['rawValue'] == 240.0
    assert run(None)['rawValue'] == 240.0


def test_threshold_option():
    result = run({'throttlingMethod': 'devtools'}, {'thresholdInMs': 200})
    assert result['details']['items'] == []
    assert result['details']['headings'] == []
    assert result['details']['summary'] == {'wastedMs': 240.0}
    assert len(result['extendedInfo']['value']) == 3

    result = run({'throttlingMethod': 'devtools'}, {'thresholdInMs': 0})
    assert [item['url'] for item in result['details']['items']] == [WIDGET, APP, VENDOR]


def test_score_options():
    result = run({'throttlingMethod': 'devtools'}, {'scorePODR': 50, 'scoreMedian': 240})
    assert result['score'] == 0.5


def test_empty_timings():
    artifacts = Artifacts({'defaultPass': 'empty'}, lambda trace: TimelineModel({}))
    result = BootupTime.audit(artifacts, {})
    assert result['rawValue'] == 0
    assert result['score'] == 1.0
    assert result['details']['items'] == []
    assert result['extendedInfo'] == {'value': {}}


def test_missing_trace():
    artifacts = Artifacts({'otherPass': TIMINGS})
    with pytest.raises(KeyError):
        BootupTime.audit(artifacts, {})


def test_model_errors_propagate():
    def broken(trace):
        raise ValueError('bad trace')

    artifacts = Artifacts({'defaultPass': TIMINGS}, broken)
    with pytest.raises(ValueError):
        BootupTime.audit(artifacts, {})
    with pytest.raises(IOError):
        run(trace=os.path.join(DATA_DIR, 'missing.json'))


def test_threshold_boundary_and_tie_order():
    model = make_model({
        'https://b.com/b.js': [('EvaluateScript', 50.0)],
        'https://c.com/c.js': [('EvaluateScript', 49.9)],
        'https://a.com/a.js': [('FunctionCall', 30.0), ('v8.compile', 20.0)],
        'https://d.com/d.js': [('EvaluateScript', 70.0)],
    })
    artifacts = Artifacts({'defaultPass': 'ties'}, lambda trace: model)
    result = BootupTime.audit(artifacts, {'settings': {'throttlingMethod': 'devtools'}})
    # rows at exactly 50ms are kept and equal sums stay in the order they were grouped
    assert [item['url'] for item in result['details']['items']] == \
        ['https://d.com/d.js', 'https://b.com/b.js', 'https://a.com/a.js']
    assert [item['sum'] for item in result['details']['items']] == [70.0, 50.0, 50.0]
    assert 'https://c.com/c.js' in result['extendedInfo']['value']
