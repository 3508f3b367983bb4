# Copyright 2019 WebPageTest LLC.
# Copyright 2017 Google Inc.
# Copyright 2020 Catchpoint Systems Inc.
# Use of this source code is governed by the Polyform Shield 1.0.0 license that can be
# found in the LICENSE.md file.
"""Main-thread task titles and the groups they roll up into"""

GROUP_ID_TO_NAME = {
    'loading': 'Network request loading',
    'parseHTML': 'Parsing HTML & CSS',
    'styleLayout': 'Style & Layout',
    'compositing': 'Compositing',
    'painting': 'Paint',
    'gpu': 'GPU',
    'scripting': 'Script Evaluation',
    'scriptParseCompile': 'Script Parsing & Compile',
    'scriptGC': 'Garbage collection',
    'other': 'Other',
    'images': 'Images',
}

TASK_TO_GROUP = {
    'Animation': GROUP_ID_TO_NAME['painting'],
    'Async Task': GROUP_ID_TO_NAME['other'],
    'Frame Start': GROUP_ID_TO_NAME['painting'],
    'Frame Start (main thread)': GROUP_ID_TO_NAME['painting'],
    'Cancel Animation Frame': GROUP_ID_TO_NAME['scripting'],
    'Cancel Idle Callback': GROUP_ID_TO_NAME['scripting'],
    'Compile Script': GROUP_ID_TO_NAME['scriptParseCompile'],
    'Composite Layers': GROUP_ID_TO_NAME['compositing'],
    'Console Time': GROUP_ID_TO_NAME['scripting'],
    'Image Decode': GROUP_ID_TO_NAME['images'],
    'Draw Frame': GROUP_ID_TO_NAME['painting'],
    'Embedder Callback': GROUP_ID_TO_NAME['scripting'],
    'Evaluate Script': GROUP_ID_TO_NAME['scripting'],
    'Event': GROUP_ID_TO_NAME['scripting'],
    'Animation Frame Fired': GROUP_ID_TO_NAME['scripting'],
    'Fire Idle Callback': GROUP_ID_TO_NAME['scripting'],
    'Function Call': GROUP_ID_TO_NAME['scripting'],
    'DOM GC': GROUP_ID_TO_NAME['scriptGC'],
    'GC Event': GROUP_ID_TO_NAME['scriptGC'],
    'GPU': GROUP_ID_TO_NAME['gpu'],
    'Hit Test': GROUP_ID_TO_NAME['compositing'],
    'Invalidate Layout': GROUP_ID_TO_NAME['styleLayout'],
    'JS Frame': GROUP_ID_TO_NAME['scripting'],
    'Input Latency': GROUP_ID_TO_NAME['scripting'],
    'Layout': GROUP_ID_TO_NAME['styleLayout'],
    'Major GC': GROUP_ID_TO_NAME['scriptGC'],
    'DOMContentLoaded event': GROUP_ID_TO_NAME['scripting'],
    'First paint': GROUP_ID_TO_NAME['painting'],
    'FMP': GROUP_ID_TO_NAME['painting'],
    'FMP candidate': GROUP_ID_TO_NAME['painting'],
    'Load event': GROUP_ID_TO_NAME['scripting'],
    'Minor GC': GROUP_ID_TO_NAME['scriptGC'],
    'Paint': GROUP_ID_TO_NAME['painting'],
    'Paint Image': GROUP_ID_TO_NAME['images'],
    'Paint Setup': GROUP_ID_TO_NAME['painting'],
    'Parse Stylesheet': GROUP_ID_TO_NAME['parseHTML'],
    'Parse HTML': GROUP_ID_TO_NAME['parseHTML'],
    'Parse Script': GROUP_ID_TO_NAME['scriptParseCompile'],
    'Other': GROUP_ID_TO_NAME['other'],
    'Rasterize Paint': GROUP_ID_TO_NAME['painting'],
    'Recalculate Style': GROUP_ID_TO_NAME['styleLayout'],
    'Request Animation Frame': GROUP_ID_TO_NAME['scripting'],
    'Request Idle Callback': GROUP_ID_TO_NAME['scripting'],
    'Request Main Thread Frame': GROUP_ID_TO_NAME['painting'],
    'Image Resize': GROUP_ID_TO_NAME['images'],
    'Finish Loading': GROUP_ID_TO_NAME['loading'],
    'Receive Data': GROUP_ID_TO_NAME['loading'],
    'Receive Response': GROUP_ID_TO_NAME['loading'],
    'Send Request': GROUP_ID_TO_NAME['loading'],
    'Run Microtasks': GROUP_ID_TO_NAME['scripting'],
    'Schedule Style Recalculation': GROUP_ID_TO_NAME['styleLayout'],
    'Scroll': GROUP_ID_TO_NAME['compositing'],
    'Task': GROUP_ID_TO_NAME['other'],
    'Timer Fired': GROUP_ID_TO_NAME['scripting'],
    'Install Timer': GROUP_ID_TO_NAME['scripting'],
    'Remove Timer': GROUP_ID_TO_NAME['scripting'],
    'Timestamp': GROUP_ID_TO_NAME['scripting'],
    'Update Layer': GROUP_ID_TO_NAME['compositing'],
    'Update Layer Tree': GROUP_ID_TO_NAME['compositing'],
    'User Timing': GROUP_ID_TO_NAME['scripting'],
    'Create WebSocket': GROUP_ID_TO_NAME['scripting'],
    'Destroy WebSocket': GROUP_ID_TO_NAME['scripting'],
    'Receive WebSocket Handshake': GROUP_ID_TO_NAME['scripting'],
    'Send WebSocket Handshake': GROUP_ID_TO_NAME['scripting'],
    'XHR Load': GROUP_ID_TO_NAME['scripting'],
    'XHR Ready State Change': GROUP_ID_TO_NAME['scripting'],
}

# Raw trace event names as recorded by Chrome and the title DevTools shows for them
EVENT_TITLES = {
    'Task': 'Task',
    'Program': 'Other',
    'EventDispatch': 'Event',
    'GCEvent': 'GC Event',
    'MajorGC': 'Major GC',
    'MinorGC': 'Minor GC',
    'JSFrame': 'JS Frame',
    'RequestMainThreadFrame': 'Request Main Thread Frame',
    'BeginFrame': 'Frame Start',
    'BeginMainThreadFrame': 'Frame Start (main thread)',
    'DrawFrame': 'Draw Frame',
    'HitTest': 'Hit Test',
    'ScheduleStyleRecalculation': 'Schedule Style Recalculation',
    'RecalculateStyles': 'Recalculate Style',
    'UpdateLayoutTree': 'Recalculate Style',
    'InvalidateLayout': 'Invalidate Layout',
    'Layout': 'Layout',
    'PaintSetup': 'Paint Setup',
    'PaintImage': 'Paint Image',
    'UpdateLayer': 'Update Layer',
    'UpdateLayerTree': 'Update Layer Tree',
    'Paint': 'Paint',
    'RasterTask': 'Rasterize Paint',
    'ScrollLayer': 'Scroll',
    'CompositeLayers': 'Composite Layers',
    'ParseHTML': 'Parse HTML',
    'ParseAuthorStyleSheet': 'Parse Stylesheet',
    'TimerInstall': 'Install Timer',
    'TimerRemove': 'Remove Timer',
    'TimerFire': 'Timer Fired',
    'XHRReadyStateChange': 'XHR Ready State Change',
    'XHRLoad': 'XHR Load',
    'v8.compile': 'Compile Script',
    'v8.parseOnBackground': 'Parse Script',
    'EvaluateScript': 'Evaluate Script',
    'MarkLoad': 'Load event',
    'MarkDOMContent': 'DOMContentLoaded event',
    'MarkFirstPaint': 'First paint',
    'TimeStamp': 'Timestamp',
    'ConsoleTime': 'Console Time',
    'UserTiming': 'User Timing',
    'ResourceSendRequest': 'Send Request',
    'ResourceReceiveResponse': 'Receive Response',
    'ResourceFinish': 'Finish Loading',
    'ResourceReceivedData': 'Receive Data',
    'RunMicrotasks': 'Run Microtasks',
    'FunctionCall': 'Function Call',
    'BlinkGCMarking': 'DOM GC',
    'ThreadState::performIdleLazySweep': 'DOM GC',
    'ThreadState::completeSweep': 'DOM GC',
    'RequestAnimationFrame': 'Request Animation Frame',
    'CancelAnimationFrame': 'Cancel Animation Frame',
    'FireAnimationFrame': 'Animation Frame Fired',
    'RequestIdleCallback': 'Request Idle Callback',
    'CancelIdleCallback': 'Cancel Idle Callback',
    'FireIdleCallback': 'Fire Idle Callback',
    'WebSocketCreate': 'Create WebSocket',
    'WebSocketSendHandshakeRequest': 'Send WebSocket Handshake',
    'WebSocketReceiveHandshakeResponse': 'Receive WebSocket Handshake',
    'WebSocketDestroy': 'Destroy WebSocket',
    'EmbedderCallback': 'Embedder Callback',
    'Decode Image': 'Image Decode',
    'Resize Image': 'Image Resize',
    'GPUTask': 'GPU',
    'LatencyInfo': 'Input Latency',
    'Animation': 'Animation',
}


def event_style(event):
    """Display style for a trace event ({'name': ...}).

    Names DevTools has no title for keep their own name as the title.
    """
    name = event.get('name', '') if event else ''
    title = EVENT_TITLES.get(name, name)
    return {'title': title}
