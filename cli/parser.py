"""Command line parser for the selfencrypt tool."""

import argparse
from typing import Optional, Sequence

from cli.models import CliOptions, DecryptCommand, EncryptCommand

USAGE = """selfencrypt -h
       selfencrypt -e <target>
       selfencrypt -d <destination>"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="selfencrypt",
        usage=USAGE,
        description="Self-encrypt a file into content-addressed chunks, or rebuild it from them.",
    )
    parser.add_argument(
        "-e", "--encrypt", nargs="?", metavar="target", dest="target",
        help="Encrypt a file.",
    )
    parser.add_argument(
        "-d", "--decrypt", nargs="?", metavar="destination", dest="destination",
        help="Decrypt a file.",
    )
    parser.add_argument(
        "--storage-dir", metavar="PATH",
        help="Chunk store directory (overrides the configured one).",
    )
    parser.add_argument(
        "--config", metavar="PATH", dest="config_path",
        help="Path to the JSON config file.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def parse_command_line(argv: Optional[Sequence[str]] = None) -> CliOptions:
    """Parse arguments into CliOptions.

    A flag given without its argument contributes no command. Encryption is
    always ordered before decryption.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        CliOptions with the commands to run
    """
    args = build_parser().parse_args(argv)

    commands = []
    if args.target:
        commands.append(EncryptCommand(target=args.target))
    if args.destination:
        commands.append(DecryptCommand(destination=args.destination))

    return CliOptions(
        commands=tuple(commands),
        storage_dir=args.storage_dir,
        config_path=args.config_path,
        debug=args.debug,
    )
