"""Core pydantic models."""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Common configuration of the provisioner data types.

    Instances are immutable and unknown attributes are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
