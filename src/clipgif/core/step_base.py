"""Base class for all pipeline steps.

Every step declares typed Input, Output and Config pydantic models, so the
driver can build a step's input from the fields produced by earlier steps
and the CLI can show each step's schema.

Steps are coroutines: a video's steps run one after another, but a step may
fan out work internally (see ``s02_extract_frames``).
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

from .errors import StepInputError

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses must:
    1. Define concrete Pydantic models for InputT, OutputT, ConfigT
    2. Set class variables: name, input_type, output_type, config_type
    3. Implement ``run()`` (async); override ``validate_inputs()`` when the
       inputs can be checked before any work starts
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT):
        self.config = config

    @abstractmethod
    async def run(self, inputs: InputT) -> OutputT:
        """Execute this step. Returns output model."""
        ...

    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that the inputs can be processed. Override where needed."""
        return True

    async def execute(self, inputs: InputT) -> OutputT:
        """Run with logging, timing, and validation."""
        step_name = self.name or self.__class__.__name__

        if not self.validate_inputs(inputs):
            raise StepInputError(f"[{step_name}] Input validation failed")

        logger.debug(f"[{step_name}] Starting...")
        t0 = time.perf_counter()
        result = await self.run(inputs)
        elapsed = time.perf_counter() - t0
        logger.info(f"[{step_name}] Done in {elapsed:.2f}s")
        return result

    @classmethod
    def get_config_schema(cls) -> dict:
        """Return JSON schema for config."""
        return cls.config_type.model_json_schema()
