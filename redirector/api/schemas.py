from pydantic import BaseModel

from redirector.components.navigation import (
    NavigationEvent,
    NavigationOutput,
    RedirectDecision,
)


class NavigationEventRequest(BaseModel):
    url: str
    frame_id: int = 0
    tab_id: int = 0

    def to_event(self) -> NavigationEvent:
        return NavigationEvent(url=self.url, frame_id=self.frame_id, tab_id=self.tab_id)


class NavigationErrorResponse(BaseModel):
    code: str
    message: str
    service_id: str | None = None


class DecisionResponse(BaseModel):
    action: str
    reason: str
    target_url: str | None = None
    service_id: str | None = None

    @classmethod
    def from_decision(cls, decision: RedirectDecision) -> "DecisionResponse":
        return cls(
            action=decision.action.value,
            reason=decision.reason.value,
            target_url=decision.target_url,
            service_id=decision.service_id,
        )


class NavigationResponse(DecisionResponse):
    applied: bool
    success: bool
    errors: list[NavigationErrorResponse] = []

    @classmethod
    def from_output(cls, output: NavigationOutput) -> "NavigationResponse":
        decision = output.decision
        return cls(
            action=decision.action.value,
            reason=decision.reason.value,
            target_url=decision.target_url,
            service_id=decision.service_id,
            applied=output.applied,
            success=output.success,
            errors=[
                NavigationErrorResponse(
                    code=e.code, message=e.message, service_id=e.service_id
                )
                for e in output.errors
            ],
        )


class ServiceResponse(BaseModel):
    identifier: str
    config_key: str
    domains: list[str]
    priority: int
