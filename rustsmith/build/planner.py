# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Build planning: run every declared module through its build pipeline.

For each declaration the planner constructs a module from its registered
factory, decides the variants it is built for, then builds each variant
from a fresh module instance with its own ModuleContext. Nothing is
executed; the result is a BuildPlan of rules, installs and diagnostics
for the external build-rule engine.

Modules share no mutable state, so declarations may be planned on a
thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .arch import Target
from .blueprint import Declaration, apply_properties
from .context import ModuleContext
from .errors import BuildError
from .registry import ModuleTypeRegistry

logger = logging.getLogger(__name__)


@dataclass
class VariantResult:
    """Outcome of building one module variant."""

    name: str
    module_type: str
    target: Target
    context: ModuleContext
    flags: Any = None
    output_file: Optional[Path] = None
    installed_path: Optional[Path] = None
    test_config: Optional[Path] = None

    @property
    def errors(self) -> list[BuildError]:
        return self.context.errors

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'type': self.module_type,
            'variant': self.target.variant_name,
            'flags': self.flags.to_dict() if self.flags is not None else None,
            'output': str(self.output_file) if self.output_file else None,
            'installed': str(self.installed_path) if self.installed_path else None,
            'test_config': str(self.test_config) if self.test_config else None,
            **self.context.summary(),
        }


@dataclass
class DeclarationFailure:
    """A declaration that failed before any variant could be built."""

    declaration: Declaration
    errors: list[BuildError]

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.declaration.name,
            'type': self.declaration.type,
            'errors': [str(e) for e in self.errors],
        }


@dataclass
class BuildPlan:
    """Every variant built, plus declarations that failed up front."""

    variants: list[VariantResult] = field(default_factory=list)
    failures: list[DeclarationFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[BuildError]:
        errors = [e for failure in self.failures for e in failure.errors]
        errors.extend(e for variant in self.variants for e in variant.errors)
        return errors

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def variants_of(self, name: str) -> list[VariantResult]:
        return [v for v in self.variants if v.name == name]

    def to_dict(self) -> dict[str, Any]:
        return {
            'succeeded': self.succeeded,
            'variants': [v.to_dict() for v in self.variants],
            'failures': [f.to_dict() for f in self.failures],
            'skipped': list(self.skipped),
        }


class BuildPlanner:
    """Plans declared modules against a registry and a system configuration.

    Args:
        registry: Module-type registry used to construct modules
        config: SystemConfig for targets and output locations
        jobs: Number of declarations planned concurrently
    """

    def __init__(self, registry: ModuleTypeRegistry, config, jobs: int = 1):
        self.registry = registry
        self.config = config
        self.jobs = max(1, jobs)

    def plan(self, declarations: list[Declaration]) -> BuildPlan:
        if self.jobs > 1 and len(declarations) > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                outcomes = list(pool.map(self._plan_declaration, declarations))
        else:
            outcomes = [self._plan_declaration(decl) for decl in declarations]

        plan = BuildPlan()
        for decl, outcome in zip(declarations, outcomes):
            if isinstance(outcome, DeclarationFailure):
                plan.failures.append(outcome)
            elif not outcome:
                plan.skipped.append(decl.name)
            else:
                plan.variants.extend(outcome)

        logger.info(
            f"Planned {len(plan.variants)} variant(s) of {len(declarations)} module(s), "
            f"{len(plan.errors)} error(s)"
        )
        return plan

    def _plan_declaration(self, decl: Declaration):
        try:
            factory = self.registry.get(decl.type)
        except BuildError as e:
            return DeclarationFailure(decl, [e])

        probe = factory()
        errors = apply_properties(probe.properties, decl.name, decl.properties)
        if errors:
            return DeclarationFailure(decl, list(errors))

        if not probe.enabled:
            logger.info(f"Skipping disabled module {decl.name}")
            return []

        targets = probe.targets(self.config)
        if not targets:
            logger.info(f"Module {decl.name} has no variants to build")
        return [self._build_variant(decl, factory, target) for target in targets]

    def _build_variant(self, decl: Declaration, factory, target: Target) -> VariantResult:
        module = factory()
        apply_properties(module.properties, decl.name, decl.properties)

        ctx = ModuleContext(decl.name, decl.module_dir, target, self.config)
        module.generate_build_actions(ctx)

        return VariantResult(
            name=decl.name,
            module_type=decl.type,
            target=target,
            context=ctx,
            flags=module.flags,
            output_file=module.output_file,
            installed_path=module.installed_path,
            test_config=module.test_config,
        )
