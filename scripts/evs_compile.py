#!/usr/bin/env python3
"""
evs_compile.py - Compile EVS property values into evsadm arguments

Validates property values (or a whole YAML manifest of EVS resources) and
prints the evsadm argument sequences they compile to. With --apply the
commands for a manifest are run against evsadm.

Usage:
    evs_compile.py uplink-port 'net0;10-20;100-200;foo;yes'
    evs_compile.py uplink-port '{uplink-port: net0, flat: null}'
    evs_compile.py --unset uri-template
    evs_compile.py --manifest site.yaml [--apply]
    evs_compile.py --list
"""

import argparse
import shlex
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.table import Table

from evs_lib.common import error, evsadm_exec, info, log, EVSADM_BIN
from evs_lib.properties import (
    DEFINITIONS_FILE,
    UNSET,
    PropertyDefinitionError,
    ValidationError,
    compile_property_list,
    load_property_specs,
)
from evs_lib.resources import build_commands, from_yaml_value, load_manifest, validate_resources


console = Console()


def parse_value(text: str):
    """
    Parse a command line value.

    Flow mappings ('{...}') and lists ('[...]') are read as YAML; anything
    else is taken literally so MAC addresses and ranges are not reinterpreted.
    """
    if text.lstrip().startswith(("{", "[")):
        return from_yaml_value(yaml.safe_load(text))
    return text


def show_properties(specs) -> None:
    """Print the property table."""
    table = Table(title="EVS properties")
    table.add_column("Property", style="cyan")
    table.add_column("Fields")
    table.add_column("Description", style="dim")
    for spec in specs.values():
        fields = ", ".join(
            f"{f.name}{'*' if f.required else ''} ({f.kind.value})" for f in spec.fields
        )
        table.add_row(spec.name, fields, spec.description)
    console.print(table)


def compile_single(args) -> int:
    try:
        specs = load_property_specs(args.definitions)
    except (OSError, yaml.YAMLError, PropertyDefinitionError) as e:
        error(f"Cannot load property definitions from {args.definitions}: {e}")
        return 1

    if args.list:
        show_properties(specs)
        return 0

    key = args.property.replace("_", "-")
    if key not in specs:
        error(f"Unknown property '{args.property}'. Available: {', '.join(specs)}")
        return 1

    if args.unset:
        value = UNSET
    elif args.value is None:
        error("A value (or --unset) is required")
        return 1
    else:
        try:
            value = parse_value(args.value)
        except yaml.YAMLError as e:
            error(f"Cannot parse value: {e}")
            return 1

    try:
        sequences = compile_property_list(specs[key], value)
    except ValidationError as e:
        error(e.message)
        return 1

    for arguments in sequences:
        print(shlex.join(arguments))
    return 0


def compile_manifest(args) -> int:
    try:
        resources = load_manifest(args.manifest)
    except (OSError, yaml.YAMLError) as e:
        error(f"Cannot read manifest {args.manifest}: {e}")
        return 1
    except ValidationError as e:
        error(e.message)
        return 1

    errors = validate_resources(resources)
    if errors:
        for msg in errors:
            error(msg)
        return 1

    table = Table(title=f"evsadm commands ({args.manifest})")
    table.add_column("Resource", style="cyan")
    table.add_column("Command")
    commands = []
    for resource in resources:
        for argv in build_commands(resource, args.evsadm):
            commands.append((resource, argv))
            table.add_row(str(resource), shlex.join(argv))
    console.print(table)

    if not args.apply:
        info(f"{len(commands)} command(s) validated, use --apply to run them")
        return 0

    failed = 0
    for resource, argv in commands:
        success, output = evsadm_exec(argv)
        if success:
            log(f"{resource}: {shlex.join(argv[1:])}")
        else:
            failed += 1
            error(f"{resource}: {output}")
    return 1 if failed else 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Compile EVS property values into evsadm arguments")
    parser.add_argument("property", nargs="?",
                        help="Property name (e.g., uplink-port, vxlan-addr, subnet)")
    parser.add_argument("value", nargs="?",
                        help="Property value: a string, or a YAML flow mapping/list")
    parser.add_argument("--unset", action="store_true",
                        help="Reset the property to its system default")
    parser.add_argument("--list", action="store_true",
                        help="List known properties")
    parser.add_argument("--definitions", type=Path, default=DEFINITIONS_FILE,
                        help=f"Property table (default: {DEFINITIONS_FILE})")
    parser.add_argument("--manifest", type=Path,
                        help="YAML manifest of EVS resources to compile")
    parser.add_argument("--apply", action="store_true",
                        help="Run the compiled manifest commands")
    parser.add_argument("--evsadm", default=EVSADM_BIN,
                        help=f"evsadm binary (default: {EVSADM_BIN})")
    args = parser.parse_args()

    if args.manifest:
        sys.exit(compile_manifest(args))

    if not args.property and not args.list:
        parser.error("a property name, --list or --manifest is required")
    if args.apply:
        parser.error("--apply requires --manifest")

    sys.exit(compile_single(args))


if __name__ == "__main__":
    main()
