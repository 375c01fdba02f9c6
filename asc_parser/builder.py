"""Fold an ordered sequence of classified lines into an ``Experiment``.

The builder keeps the trial list plus an explicit "current trial" reference.
Records that belong to a trial raise ``StructuralError`` when none is open.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from .config import ParserConfig
from .domain.experiment import (
    Blink,
    CameraFrame,
    EventRecord,
    Experiment,
    EyeSampleData,
    Fixation,
    RawEyeSampleData,
    RawSample,
    Saccade,
    Sample,
    TargetInfo,
    TimeRecord,
    Trial,
    optional_pair,
)
from .errors import AscError, StructuralError
from .grammar import elements as el
from .grammar import messages as msg

logger = logging.getLogger(__name__)


def sample_from_line(line: el.SampleLine) -> Sample:
    return Sample(
        time=line.time,
        left=EyeSampleData.from_fields(
            line.left_pos_x,
            line.left_pos_y,
            line.left_area,
            line.left_velocity_x,
            line.left_velocity_y,
            line.left_cr_missing,
            line.left_cr_recovering,
        ),
        right=EyeSampleData.from_fields(
            line.right_pos_x,
            line.right_pos_y,
            line.right_area,
            line.right_velocity_x,
            line.right_velocity_y,
            line.right_cr_missing,
            line.right_cr_recovering,
        ),
        resolution=optional_pair(line.res_x, line.res_y),
    )


def raw_eye_from_block(block: msg.RawEyeBlock) -> RawEyeSampleData:
    return RawEyeSampleData(
        pupil_position=(block.pupil_pos_x, block.pupil_pos_y),
        pupil_area=block.pupil_area,
        pupil_size=(block.pupil_size_x, block.pupil_size_y),
        cr_position=(block.cr_pos_x, block.cr_pos_y),
        cr_area=block.cr_area,
    )


def event_from_line(line: el.Element) -> EventRecord:
    """Build an ``EventRecord`` from a fixation, saccade or blink end line."""
    time_record = TimeRecord.checked(line.start_time, line.end_time, line.duration)
    if isinstance(line, el.FixationEnd):
        info = Fixation(
            average_position=(line.average_pos_x, line.average_pos_y),
            average_pupil_area=line.average_pupil_size,
        )
        return EventRecord(line.eye, time_record, info, (line.res_x, line.res_y))
    if isinstance(line, el.SaccadeEnd):
        info = Saccade(
            start_position=optional_pair(line.start_pos_x, line.start_pos_y),
            end_position=optional_pair(line.end_pos_x, line.end_pos_y),
            movement_angle=line.movement_angle,
            peak_velocity=line.peak_velocity,
        )
        return EventRecord(line.eye, time_record, info, (line.res_x, line.res_y))
    return EventRecord(line.eye, time_record, Blink(), None)


class ExperimentBuilder:
    """Stateful reducer over classified ASC lines.

    Example:
        >>> builder = ExperimentBuilder()
        >>> for number, element in enumerate(elements):
        ...     builder.feed(element, number)
        >>> experiment = builder.finish()
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.experiment = Experiment()
        self._current: Optional[Trial] = None
        self._labels_declared = False
        self.dropped: Counter = Counter()

    @property
    def has_open_trial(self) -> bool:
        return self._current is not None

    def _open_trial(self, what: str) -> Trial:
        if self._current is None:
            raise StructuralError(f"{what} reported outside open trial")
        return self._current

    def feed(self, element: el.Element, line_number: Optional[int] = None, line: Optional[str] = None) -> None:
        """Apply one classified line; errors are located at ``line_number``."""
        try:
            self._apply(element)
        except AscError as exc:
            if line_number is None or exc.line_number is not None:
                raise
            raise exc.with_context(line_number, line) from None

    def feed_all(self, records: Iterable[Tuple[int, str, el.Element]]) -> "ExperimentBuilder":
        for line_number, line, element in records:
            self.feed(element, line_number, line)
        return self

    def _apply(self, element: el.Element) -> None:
        if isinstance(element, el.Msg):
            self._apply_message(element.time, element.payload)
        elif isinstance(element, el.SampleLine):
            self._open_trial("Sample").samples.append(sample_from_line(element))
        elif isinstance(element, (el.FixationEnd, el.SaccadeEnd, el.BlinkEnd)):
            trial = self._open_trial("Event")
            trial.events.append(event_from_line(element))
        elif isinstance(element, el.Preamble):
            self._apply_preamble(element.payload)
        else:
            self.dropped[type(element).__name__] += 1

    def _apply_preamble(self, payload: el.PreamblePayload) -> None:
        meta = self.experiment.meta
        if isinstance(payload, el.PreambleDateTime):
            meta.recording_datetime = payload.value
        elif isinstance(payload, el.PreambleOther):
            meta.preamble_lines.append(payload.text)
        else:
            self.dropped["PreambleEmpty"] += 1

    def _apply_message(self, time: Decimal, payload: msg.MessagePayload) -> None:
        if isinstance(payload, msg.TrialIdMsg):
            trial = Trial.from_trial_start(payload.trial_id, time)
            self.experiment.trials.append(trial)
            self._current = trial
        elif isinstance(payload, msg.TrialResultMsg):
            trial = self._open_trial("Trial result")
            trial.time_record = replace(trial.time_record, end=time)
        elif isinstance(payload, msg.RawDataMsg):
            self._open_trial("Raw sample").raw_samples.append(
                RawSample(
                    time=payload.time,
                    left=raw_eye_from_block(payload.left),
                    right=raw_eye_from_block(payload.right),
                )
            )
        elif isinstance(payload, msg.CameraFrameMsg):
            self._open_trial("Camera frame").camera_frames.append(
                CameraFrame(
                    name=payload.name,
                    idx=payload.frame_idx,
                    cam_time=payload.cam_time,
                    sys_time=payload.sys_time,
                    process_time=payload.process_time,
                    eyelink_time=payload.eyelink_time,
                    version=payload.version,
                )
            )
        elif isinstance(payload, msg.TrialVarLabelsMsg):
            if self._labels_declared:
                logger.debug("TRIAL_VAR_LABELS repeated, replacing %s", self.experiment.variable_labels)
            self.experiment.variable_labels = list(payload.labels)
            self._labels_declared = True
        elif isinstance(payload, msg.TrialVarValuesMsg):
            self._open_trial("Trial variable data").variables = list(payload.values)
        elif isinstance(payload, msg.TargetPositionsMsg):
            trial = self._open_trial("Target position")
            for target in payload.targets:
                trial.add_target(target.name, TargetInfo(time=time, position=target.position))
        else:
            self.dropped[type(payload).__name__] += 1

    def _check_variables(self) -> None:
        labels = self.experiment.variable_labels
        for trial in self.experiment.trials:
            if not trial.variables or len(trial.variables) == len(labels):
                continue
            if not self._labels_declared:
                logger.warning(
                    "Trial %s reports %d variable values but no TRIAL_VAR_LABELS were declared",
                    trial.id,
                    len(trial.variables),
                )
                continue
            if self.config.strict_variables:
                raise StructuralError(
                    f"Trial {trial.id} has {len(trial.variables)} variable values "
                    f"for {len(labels)} labels"
                )
            logger.warning(
                "Trial %s has %d variable values for %d labels",
                trial.id,
                len(trial.variables),
                len(labels),
            )

    def finish(self) -> Experiment:
        """Validate and return the experiment; the builder must not be fed afterwards."""
        self._check_variables()
        logger.info(
            "Built experiment with %d trials (%d variable labels)",
            len(self.experiment.trials),
            len(self.experiment.variable_labels),
        )
        if self.dropped:
            logger.debug("Dropped records: %s", dict(self.dropped))
        return self.experiment


def build_experiment(elements: Iterable[el.Element], config: Optional[ParserConfig] = None) -> Experiment:
    """Fold classified elements (in line order) into an ``Experiment``."""
    builder = ExperimentBuilder(config)
    for line_number, element in enumerate(elements):
        builder.feed(element, line_number)
    return builder.finish()
