"""New command - scaffold a script from the template."""

from __future__ import annotations

import logging
import stat
from argparse import Namespace
from pathlib import Path

from denim.core.identity import project_name
from denim.errors import ValidationError, while_doing

logger = logging.getLogger(__name__)

SCRIPT_TEMPLATE = """\
#!/usr/bin/env -S denim
/* Cargo.toml
[package]
name = "{name}"
version = "0.1.0"
authors = ["Anonymous"]
edition = "{edition}"

[dependencies]
*/

/// Example script description
fn main() {{
    let args: Vec<String> = std::env::args().skip(1).collect();
    if args.is_empty() {{
        println!("Hello world!");
    }} else {{
        println!("Hello {{}}!", args.join(" "));
    }}
}}

// vim: ft=rust
"""


def render_template(name: str, edition: str) -> str:
    return SCRIPT_TEMPLATE.format(name=name, edition=edition)


def write_template(script: Path, name: str, edition: str) -> None:
    """Write the template and mark the script user-executable."""
    with while_doing("writing template to new script file"):
        with script.open("x", encoding="utf-8") as handle:
            handle.write(render_template(name, edition))
    with while_doing("setting executable permission"):
        mode = script.stat().st_mode
        script.chmod(mode | stat.S_IXUSR)


def run_new(args: Namespace, *, settings) -> int:
    """Generate a new script."""
    script = Path(args.script)
    if script.exists():
        raise ValidationError(f"Script {str(script)!r} already exists")
    name = project_name(script)
    logger.info("Generating new script %r in %s", name, script)
    write_template(script, name, settings.edition)
    return 0
