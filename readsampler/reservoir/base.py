"""Online template sampling interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from readsampler.record import Template


class TemplateSampler(ABC):
    """Base interface for single-pass template samplers."""

    @abstractmethod
    def observe(self, template: Template) -> None:
        """Consider one template for inclusion in the sample."""

    @abstractmethod
    def finalize(self) -> list[Template]:
        """Return the retained templates in slot order."""

    def sample(self, templates: Iterable[Template]) -> list[Template]:
        """Observe every template in *templates*, then finalize."""
        for template in templates:
            self.observe(template)
        return self.finalize()
