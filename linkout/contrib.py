from __future__ import annotations

import importlib
import logging
import os
from typing import List, Mapping, Optional

from .registry import Contributor, LinkoutRegistry, build_registry

logger = logging.getLogger(__name__)

CONTRIBUTORS_ENV = "LINKOUT_CONTRIBUTORS"


def load_contributor(reference: str) -> Contributor:
    module_name, sep, attr = reference.strip().partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Contributor '{reference}' must look like 'package.module:callable'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Contributor module '{module_name}' could not be imported: {exc}") from exc

    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ValueError(f"Contributor '{reference}' does not exist") from exc
    if not callable(target):
        raise ValueError(f"Contributor '{reference}' is not callable")
    return target


def load_contributors(text: Optional[str]) -> List[Contributor]:
    """Import every ``module:callable`` in a comma-separated list."""

    if not text:
        return []
    contributors = []
    for reference in text.split(","):
        if not reference.strip():
            continue
        contributors.append(load_contributor(reference))
        logger.info("Loaded link-out contributor %s", reference.strip())
    return contributors


def registry_from_environment(environ: Optional[Mapping[str, str]] = None) -> LinkoutRegistry:
    env = os.environ if environ is None else environ
    return build_registry(load_contributors(env.get(CONTRIBUTORS_ENV, "")))
