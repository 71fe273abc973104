# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Test-harness configuration generation.

A test module either ships its own harness config (declared through
test_config, or an AndroidTest.xml next to its declaration file) or gets
one generated from a template. Templates are XML with {MODULE},
{EXTRA_CONFIGS} and {OUTPUT_FILENAME} placeholders.

Logging Strategy:
    - DEBUG: Which config source was chosen for a module
    - INFO: Generated config files
"""

import html
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import jinja2

from rustsmith.build.errors import HarnessConfigError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEVICE_TEMPLATE = "rust_device_test_config_template.xml"
HOST_TEMPLATE = "rust_host_test_config_template.xml"

# Picked up from the module's directory when test_config is not declared
DEFAULT_TEST_CONFIG = "AndroidTest.xml"

# Suites whose configs are never generated
_NO_AUTOGEN_SUITES = ("cts",)

_XML_INDENT = "    "


@dataclass(frozen=True)
class Option:
    """Extra <option> element injected at {EXTRA_CONFIGS}."""

    name: str
    value: str

    def config(self) -> str:
        return f'<option name="{html.escape(self.name)}" value="{html.escape(self.value)}" />'


class HarnessConfigRenderer:
    """Renders harness config templates with jinja2.

    Placeholders use single braces, so the environment's variable
    delimiters are '{' and '}'.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir or TEMPLATE_DIR
        self._env = None

    def _create_jinja_env(self) -> jinja2.Environment:
        if self._env is None:
            self._env = jinja2.Environment(
                loader=jinja2.FileSystemLoader(str(self.template_dir)),
                variable_start_string="{",
                variable_end_string="}",
                keep_trailing_newline=True,
                autoescape=False,
                undefined=jinja2.StrictUndefined,
            )
        return self._env

    def load(self, name: str) -> jinja2.Template:
        """Load a bundled template by file name."""
        return self._create_jinja_env().get_template(name)

    def from_file(self, path: Path) -> jinja2.Template:
        """Compile a user-supplied template file."""
        return self._create_jinja_env().from_string(Path(path).read_text(encoding="utf-8"))

    def render(
        self,
        template: jinja2.Template,
        module: str,
        output_filename: str,
        extra_configs: Sequence[Option] = (),
    ) -> str:
        return template.render(
            MODULE=module,
            OUTPUT_FILENAME=output_filename,
            EXTRA_CONFIGS=f"\n{_XML_INDENT}".join(option.config() for option in extra_configs),
        )


_renderer = HarnessConfigRenderer()


def _declared_test_config(ctx, test_config: Optional[str]) -> Optional[Path]:
    """Explicit harness config: declared, else the default file if present."""
    if test_config is not None:
        path = ctx.optional_path_for_module_src(test_config)
        if path is None:
            raise HarnessConfigError(
                f"{ctx.module_name()}: test_config: {test_config!r} does not exist"
            )
        return path
    return ctx.optional_path_for_module_src(DEFAULT_TEST_CONFIG)


def resolve_test_config_path(
    ctx,
    test_config: Optional[str],
    test_suites: Sequence[str],
    auto_gen_config: Optional[bool],
) -> tuple[Optional[Path], Optional[Path]]:
    """Decide between an explicit config and a generated one.

    Returns:
        (explicit config path or None, path to generate into or None);
        at most one of the two is set
    """
    path = _declared_test_config(ctx, test_config)

    if not auto_gen_config and path is not None:
        return path, None
    if not any(suite in _NO_AUTOGEN_SUITES for suite in test_suites) and auto_gen_config is not False:
        return None, ctx.path_for_module_out(f"{ctx.module_name()}.config")
    return path, None


def _template_for(ctx, renderer: HarnessConfigRenderer, template: Optional[str]) -> jinja2.Template:
    try:
        if template is not None:
            path = ctx.optional_path_for_module_src(template)
            if path is None:
                raise HarnessConfigError(
                    f"{ctx.module_name()}: test_config_template: {template!r} does not exist"
                )
            return renderer.from_file(path)
        return renderer.load(DEVICE_TEMPLATE if ctx.device else HOST_TEMPLATE)
    except UnicodeDecodeError as e:
        raise HarnessConfigError(f"{ctx.module_name()}: test_config_template: {template!r} is not UTF-8: {e}") from e
    except jinja2.TemplateError as e:
        raise HarnessConfigError(f"{ctx.module_name()}: invalid test config template: {e}") from e


def auto_gen_rust_test_config(
    ctx,
    test_config: Optional[str],
    test_config_template: Optional[str],
    test_suites: Sequence[str],
    config: Optional[Sequence[Option]],
    auto_gen_config: Optional[bool],
    renderer: Optional[HarnessConfigRenderer] = None,
) -> Optional[Path]:
    """Produce the harness config for a Rust test module variant.

    Args:
        ctx: Module context of the variant
        test_config: Declared config file, relative to the module directory
        test_config_template: Declared template, relative to the module directory
        test_suites: Compatibility suites the module belongs to
        config: Extra options to inject into generated configs
        auto_gen_config: Declared auto-generation toggle (None means unset)
        renderer: Template renderer, the shared default when omitted

    Returns:
        Path of the config to install with the test, or None when there is none

    Raises:
        HarnessConfigError: If a declared file is missing or a template is invalid
    """
    renderer = renderer or _renderer
    path, autogen_path = resolve_test_config_path(ctx, test_config, test_suites, auto_gen_config)

    if autogen_path is None:
        logger.debug(f"{ctx.module_name()}: using explicit test config {path}")
        return path

    template = _template_for(ctx, renderer, test_config_template)
    output_filename = ctx.module_name() + ctx.toolchain.executable_suffix
    try:
        content = renderer.render(template, ctx.module_name(), output_filename, config or ())
    except jinja2.TemplateError as e:
        raise HarnessConfigError(f"{ctx.module_name()}: invalid test config template: {e}") from e

    ctx.write_file(autogen_path, content)
    logger.info(f"Generated test config {autogen_path}")
    return autogen_path
