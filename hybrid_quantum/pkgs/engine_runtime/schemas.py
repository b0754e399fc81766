"""Pydantic schemas for the engine service API."""

from pydantic import BaseModel, Field


class InitRequest(BaseModel):
    """Request schema for engine initialization."""
    seed: int = 0
    qubits: int = Field(default=4, ge=1)
    layers: int = Field(default=3, ge=1)


class TrainRequest(BaseModel):
    """Request schema for a training run."""
    epochs: int = Field(default=5, ge=0)
