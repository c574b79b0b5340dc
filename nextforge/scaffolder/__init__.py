"""nextforge scaffolder -- generates component directories and config files.

Quick usage::

    from nextforge.config import load_config
    from nextforge.scaffolder import ComponentGenerator, ComponentRequest

    generator = ComponentGenerator(load_config("."), cwd=".")
    result = await generator.generate(ComponentRequest(name="marketing/Hero", group="section"))
"""

from nextforge.scaffolder.component import (
    ComponentGenerator,
    ComponentNameError,
    ComponentRequest,
    ComponentResult,
)
from nextforge.scaffolder.initializer import InitResult, run_init
from nextforge.scaffolder.templates import TemplateRenderer

__all__ = [
    "ComponentGenerator",
    "ComponentNameError",
    "ComponentRequest",
    "ComponentResult",
    "InitResult",
    "TemplateRenderer",
    "run_init",
]
