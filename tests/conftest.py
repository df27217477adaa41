"""
Shared fixtures: common timelines and a log record collector.
"""

import pytest

from keyframe_engine.models import EASE_IN, InterpolationMode, Keyframe, LogLevel, Timeline
from keyframe_engine.utils.logger import configure_logger, get_logger


def kf(time, **properties):
    """Shorthand for a validated keyframe"""
    return Keyframe.new_or_raise(time=time, properties=properties)


@pytest.fixture
def simple_timeline():
    """1000 units, x: 0 → 100, linear"""
    return Timeline.new_or_raise(
        duration=1000,
        keyframes=[kf(0.0, x=0), kf(1.0, x=100)],
        id="simple",
    )


@pytest.fixture
def complex_timeline():
    """Three keyframes with a mid-way point and a local easing override"""
    return Timeline.new_or_raise(
        duration=2000,
        keyframes=[
            Keyframe.new_or_raise(time=0.0, properties={"x": 0, "opacity": 0.0}, easing=EASE_IN),
            kf(0.5, x=50, opacity=1.0),
            kf(1.0, x=100, opacity=0.5),
        ],
        id="complex",
    )


@pytest.fixture
def string_timeline():
    """Text property switching between labels"""
    return Timeline.new_or_raise(
        duration=1000,
        keyframes=[kf(0.0, label="start"), kf(1.0, label="end")],
    )


@pytest.fixture
def vector_timeline():
    """2D position and RGBA color"""
    return Timeline.new_or_raise(
        duration=1000,
        keyframes=[
            kf(0.0, position=(0, 0), color=(255, 0, 0, 1.0)),
            kf(1.0, position=(100, 50), color=(0, 0, 255, 0.0)),
        ],
    )


@pytest.fixture
def discrete_timeline():
    return Timeline.new_or_raise(
        duration=1000,
        keyframes=[
            Keyframe.new_or_raise(time=0.0, properties={"x": 0},
                                  interpolation_mode=InterpolationMode.DISCRETE),
            kf(1.0, x=100),
        ],
    )


@pytest.fixture
def log_records():
    """
    Collect every log record emitted while the test runs.

    Records are (level, category, message, details) tuples. The logger
    is switched to DEBUG without colors and restored afterwards.
    """
    logger = get_logger()
    previous = (logger.min_level, logger.use_colors)
    records = []

    def sink(timestamp, level, category, message, details):
        records.append((level, category, message, details))

    configure_logger(min_level=LogLevel.DEBUG, use_colors=False)
    logger.add_sink(sink)
    yield records
    logger.remove_sink(sink)
    configure_logger(min_level=previous[0], use_colors=previous[1])
