"""
JavaScript boot-up time audit over the script timings recorded by the trace processor.
"""

from .artifacts import Artifacts
from .bootup_time import BootupTime
from .timeline_model import TimelineModel
