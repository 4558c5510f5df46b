from __future__ import annotations

import copy
import logging
import random
import threading
import time
from collections.abc import Sequence

from plan_visit.config import VisitSettings, waypoints_from_degrees
from plan_visit.errors import ActivationRejected, ConfigurationError
from plan_visit.models.events import (
    ActivationRequest,
    ConfigurationUpdate,
    DeactivationRequest,
    Event,
    PlanOutcome,
    PlanState,
    PlanStatusEvent,
    PositionEstimate,
    Tick,
    VehicleMode,
    VehicleStateEvent,
)
from plan_visit.models.geo import Position
from plan_visit.models.mission_plan import PlanControl
from plan_visit.models.mission_state import ControllerState, MissionState
from plan_visit.pipeline.plan_and_dispatch import Dispatch, PipelineResult, run_pipeline

logger = logging.getLogger(__name__)

_ACTIVE_STATES = (ControllerState.ARMED, ControllerState.DISPATCHED, ControllerState.RUNNING)


class MissionController:
    """
    Decides when to plan the visiting tour and when to give control back.

    The pipeline runs at most once per activation: once armed, it waits for
    the vehicle to report service mode, plans from the current position
    snapshot and hands a start request to ``dispatch``. A successful
    completion is answered with a ``DeactivationRequest`` returned to the
    caller instead of deactivating in place.
    """

    def __init__(
        self,
        settings: VisitSettings,
        dispatch: Dispatch,
        rng: random.Random | None = None,
    ):
        self.settings = settings
        self._dispatch = dispatch
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._state = MissionState()
        self.last_result: PipelineResult | None = None
        self.configure(settings.points_to_visit)

    # ------------------------------------------------------------ state access

    @property
    def state(self) -> ControllerState:
        with self._lock:
            return self._state.state

    def snapshot(self) -> MissionState:
        with self._lock:
            return copy.deepcopy(self._state)

    # ------------------------------------------------------------ configuration

    def configure(self, points_deg: Sequence[float]) -> bool:
        """Apply a new flat degree list. Returns whether the configuration is usable."""
        try:
            waypoints = waypoints_from_degrees(points_deg)
        except ConfigurationError as e:
            logger.warning("%s. Task is deactivated.", e)
            with self._lock:
                self._state.waypoints = []
                self._state.enabled = False
                self._state.active = False
                self._state.plan_sent = False
                self._state.state = ControllerState.DISABLED
            return False

        with self._lock:
            self._state.waypoints = waypoints
            self._state.enabled = True
            if self._state.state == ControllerState.DISABLED:
                self._state.state = ControllerState.IDLE
        if len(waypoints) > self.settings.max_waypoints:
            logger.warning(
                "%d points to visit exceeds the exact-solver ceiling of %d; planning time grows factorially",
                len(waypoints),
                self.settings.max_waypoints,
            )
        logger.info("configured %d points to visit", len(waypoints))
        return True

    # ------------------------------------------------------------ activation

    def activate(self) -> None:
        with self._lock:
            if not self._state.enabled:
                logger.warning("Cannot activate task since the given points to visit are not ok.")
                raise ActivationRejected("points to visit are not valid lat/lon pairs")
            if self._state.active:
                logger.info("already active in %s; activation ignored", self._state.state.value)
                return
            self._state.active = True
            self._state.plan_sent = False
            self._state.state = ControllerState.ARMED
        logger.info("activated; waiting for vehicle in %s mode", VehicleMode.SERVICE.value)

    def deactivate(self, reason: str = "requested") -> None:
        with self._lock:
            was = self._state.state
            self._state.active = False
            self._state.plan_sent = False
            if self._state.enabled:
                self._state.state = ControllerState.IDLE
        if was in _ACTIVE_STATES:
            logger.info("deactivated from %s (%s)", was.value, reason)

    # ------------------------------------------------------------ consumers

    def on_position(self, event: PositionEstimate) -> None:
        with self._lock:
            self._state.position = Position(lat=event.lat, lon=event.lon)
            self._state.position_stamp = time.monotonic()

    def on_vehicle_state(self, event: VehicleStateEvent) -> None:
        with self._lock:
            self._state.vehicle_mode = event.op_mode

    def on_plan_status(self, event: PlanStatusEvent) -> list[Event]:
        follow_ups: list[Event] = []
        with self._lock:
            st = self._state
            st.in_mission = event.state == PlanState.EXECUTING
            st.progress = event.progress
            st.last_outcome = event.last_outcome

            if st.state == ControllerState.DISPATCHED and st.in_mission:
                st.state = ControllerState.RUNNING
                logger.info("plan %s is executing", self.settings.plan_id)
            elif st.state == ControllerState.RUNNING and not st.in_mission:
                if event.last_outcome == PlanOutcome.SUCCESS:
                    follow_ups.append(DeactivationRequest(reason="plan completed"))
                else:
                    # latched: nothing is retried until the operator deactivates
                    self._warn_stopped(event.last_outcome)
            elif st.state == ControllerState.DISPATCHED and event.last_outcome == PlanOutcome.FAILURE:
                # start request rejected, or the plan failed before it was seen executing
                self._warn_stopped(event.last_outcome)
        return follow_ups

    def _warn_stopped(self, outcome: PlanOutcome) -> None:
        logger.warning("plan %s stopped with outcome %s", self.settings.plan_id, outcome.value)

    # ------------------------------------------------------------ main step

    def ready_to_plan(self) -> bool:
        with self._lock:
            st = self._state
            return (
                st.state == ControllerState.ARMED
                and not st.plan_sent
                and st.vehicle_mode == VehicleMode.SERVICE
                and st.position is not None
            )

    def step(self) -> PlanControl | None:
        """Run the planning pipeline if armed and the vehicle is ready. Returns the dispatched request."""
        with self._lock:
            position = self._state.position
            if position is None or not self.ready_to_plan():
                return None
            waypoints = list(self._state.waypoints)

        result = run_pipeline(position, waypoints, self.settings, self._rng)

        with self._lock:
            if self._state.state != ControllerState.ARMED:
                logger.info("deactivated while planning; plan %s not sent", result.plan.plan_id)
                return None
            self._state.plan_sent = True
            self._state.state = ControllerState.DISPATCHED
            self.last_result = result
        self._dispatch(result.request)
        return result.request

    def handle(self, event: Event) -> list[Event]:
        """Apply one event, then give the pipeline a chance to run. Returns follow-up events."""
        follow_ups: list[Event] = []
        if isinstance(event, PositionEstimate):
            self.on_position(event)
        elif isinstance(event, VehicleStateEvent):
            self.on_vehicle_state(event)
        elif isinstance(event, PlanStatusEvent):
            follow_ups = self.on_plan_status(event)
        elif isinstance(event, ActivationRequest):
            self.activate()
        elif isinstance(event, DeactivationRequest):
            self.deactivate(event.reason)
        elif isinstance(event, ConfigurationUpdate):
            self.configure(event.points_to_visit)
        elif not isinstance(event, Tick):
            raise TypeError(f"Unrecognized event: {event!r}")
        self.step()
        return follow_ups
