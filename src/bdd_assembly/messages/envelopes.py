"""Envelope: the discriminated record of the output stream."""

from typing import Self

from pydantic import model_validator

from bdd_assembly.models import MessageModel

from .plan import TestCaseMessage
from .support import HookMessage, ParameterTypeMessage, StepDefinitionMessage, UndefinedParameterTypeMessage


class Envelope(MessageModel):
    """Self-describing record holding exactly one message."""

    parameter_type: ParameterTypeMessage | None = None
    step_definition: StepDefinitionMessage | None = None
    hook: HookMessage | None = None
    undefined_parameter_type: UndefinedParameterTypeMessage | None = None
    test_case: TestCaseMessage | None = None

    @model_validator(mode='after')
    def check_single_message(self) -> Self:
        """Check that the envelope carries exactly one message.

        Returns:
            Self.

        Raises:
            ValueError: If the envelope is empty or holds several messages.
        """
        present = [
            name
            for name in type(self).model_fields
            if getattr(self, name) is not None
        ]
        if len(present) != 1:
            raise ValueError(f'envelope must hold exactly one message, got {len(present)}')

        return self
