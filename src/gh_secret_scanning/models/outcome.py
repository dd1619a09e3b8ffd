"""
Verification outcome model.

Defines the aggregate result of a fetch-and-verify run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .alert import Alert


class VerifyOutcome(BaseModel):
	"""
	Aggregate outcome of a verification run.

	``alerts`` keeps the normalized (repository, number) order.
	"""

	alerts: list[Alert] = Field(default_factory=list)
	timed_out: bool = Field(
	    default=False,
	    description="True when the batch deadline cancelled pending probes",
	)

	@property
	def valid_alerts(self) -> list[Alert]:
		return [a for a in self.alerts if a.validity_boolean]

	@property
	def valid_count(self) -> int:
		return len(self.valid_alerts)


__all__ = ["VerifyOutcome"]
