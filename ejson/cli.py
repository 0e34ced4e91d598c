"""
Command-line interface for the ejson tool.

This module orchestrates all other components and provides
the user-facing CLI commands:
- keygen
- encrypt
- decrypt
- help
"""

from __future__ import annotations

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from .config import (
    DEFAULT_KEYDIR,
    DEFAULT_SETTINGS_FILE,
    ENV_KEYDIR,
    TOOL_VERSION,
)
from .document import (
    dump_document,
    encrypt_file,
    extract_public_key,
    load_document,
    save_document,
)
from .errors import EJSONError
from .keydir import load_private_key, resolve_keydir, save_private_key
from .keys import generate_keypair
from .settings import Settings
from .transformer import decrypt_tree


# ---------------------------------------------------------------------------
# Color output helpers
# ---------------------------------------------------------------------------


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colored(text: str, color: str) -> str:
    """Return colored text for terminal output."""
    return f"{color}{text}{Colors.RESET}"


def print_error(msg: str) -> None:
    """Print error message to stderr."""
    print(colored(f"✗ Error: {msg}", Colors.RED), file=sys.stderr)


def print_success(msg: str) -> None:
    """Print success message."""
    print(colored(f"✓ {msg}", Colors.GREEN))


def print_warning(msg: str) -> None:
    """Print warning message to stderr."""
    print(colored(f"⚠ Warning: {msg}", Colors.YELLOW), file=sys.stderr)


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library logging to stderr at a level matching the flags."""
    logger = logging.getLogger("ejson")
    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.ERROR)
    else:
        logger.setLevel(logging.WARNING)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


# ---------------------------------------------------------------------------
# CLI context
# ---------------------------------------------------------------------------


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(
        self,
        settings_path: Optional[str],
        keydir: Optional[str],
        verbose: bool,
        quiet: bool,
    ):
        self.settings_path = settings_path
        self.keydir_arg = keydir
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded
        self._settings: Optional[Settings] = None

    @property
    def settings(self) -> Settings:
        """Load settings lazily; the default file is optional."""
        if self._settings is None:
            if self.settings_path:
                self._settings = Settings.load(self.settings_path)
            else:
                self._settings = Settings.load(DEFAULT_SETTINGS_FILE, required=False)
        return self._settings

    @property
    def keydir(self) -> Path:
        return resolve_keydir(self.keydir_arg, self.settings)

    def log(self, msg: str) -> None:
        """Log message if not quiet."""
        if not self.quiet:
            print(msg)

    def log_verbose(self, msg: str) -> None:
        """Log message if verbose."""
        if self.verbose:
            print(colored(f"  → {msg}", Colors.BLUE), file=sys.stderr)


# ---------------------------------------------------------------------------
# Command implementations
# ---------------------------------------------------------------------------


def cmd_keygen(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Generate a keypair, optionally storing the private key in the keydir.
    """
    keypair = generate_keypair()

    if args.write:
        path = save_private_key(keypair, ctx.keydir)
        ctx.log_verbose(f"Private key written to {path}")
        print("Public Key:")
        print(keypair.public_key)
        return 0

    print("Public Key:")
    print(keypair.public_key)
    print("\nPrivate Key:")
    print(keypair.private_key)
    return 0


def cmd_encrypt(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Encrypt each file in place using the public key it carries.
    """
    output = ctx.settings.output

    for file in args.files:
        ctx.log_verbose(f"Encrypting: {file}")
        try:
            encrypt_file(file, indent=output.indent, sort_keys=output.sort_keys)
        except EJSONError as e:
            print_error(f"Failed to encrypt {file}: {e}")
            return 1
        ctx.log(f"  ✓ Encrypted {file}")

    if not ctx.quiet:
        print_success(f"Encrypted {len(args.files)} file(s)")
    return 0


def cmd_decrypt(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Decrypt one file and print (or write) the plaintext document.
    """
    file = args.file
    output = ctx.settings.output

    try:
        document = load_document(file)
        public_key = extract_public_key(document)

        if args.key_from_stdin:
            private_key = sys.stdin.read().strip()
        else:
            ctx.log_verbose(f"Looking up private key in {ctx.keydir}")
            private_key = load_private_key(public_key, ctx.keydir)

        decrypted = decrypt_tree(document, private_key)
    except EJSONError as e:
        print_error(f"Failed to decrypt {file}: {e}")
        return 1

    if args.output:
        save_document(args.output, decrypted, indent=output.indent, sort_keys=output.sort_keys)
        ctx.log_verbose(f"Wrote plaintext to {args.output}")
        print_warning(f"{args.output} contains plaintext secrets; do NOT commit it")
        return 0

    sys.stdout.write(dump_document(decrypted, indent=output.indent, sort_keys=output.sort_keys))
    return 0


def cmd_help(ctx: Optional[CLIContext], args: argparse.Namespace) -> int:
    """
    Show help message.
    """
    help_text = f"""
{colored('ejson', Colors.BOLD)} — encrypt secrets inside JSON files

{colored('USAGE:', Colors.CYAN)}
  ejson [options] <command> [command options]

{colored('DESCRIPTION:', Colors.CYAN)}
  ejson encrypts every string value of a JSON document with the public
  key stored in its "_public_key" field. Keys, numbers, booleans and
  null stay readable, so encrypted files can be committed and diffed.

  Decryption needs the matching private key, looked up in the key
  directory under the file's public key.

{colored('COMMANDS:', Colors.CYAN)}
  keygen            Generate a new keypair
  encrypt FILE...   Encrypt one or more EJSON files in place
  decrypt FILE      Decrypt an EJSON file and print the result
  help              Show this help message

{colored('GLOBAL OPTIONS:', Colors.CYAN)}
  -k, --keydir PATH         Key directory
                            (default: ${ENV_KEYDIR} or {DEFAULT_KEYDIR})
  -c, --config PATH         Settings file
                            (default: {DEFAULT_SETTINGS_FILE}, if present)
  -v, --verbose             Enable verbose output
  -q, --quiet               Suppress non-error output
  -h, --help                Show this help message and exit

{colored('KEYGEN OPTIONS:', Colors.CYAN)}
  -w, --write               Write the private key to the key directory
                            and print only the public key

{colored('DECRYPT OPTIONS:', Colors.CYAN)}
  -o, --output PATH         Write the decrypted document to PATH
  --key-from-stdin          Read the private key from standard input

{colored('ENVIRONMENT:', Colors.CYAN)}
  {ENV_KEYDIR}              Key directory used when --keydir is not given

{colored('EXAMPLES:', Colors.CYAN)}
  ejson keygen
  ejson keygen -w
  ejson encrypt secrets.ejson
  ejson decrypt secrets.ejson
  ejson --keydir ~/.ejson/keys decrypt secrets.ejson

{colored('VERSION:', Colors.CYAN)}
  {TOOL_VERSION}
"""
    print(help_text)
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ejson",
        description="Encrypt secrets inside JSON files",
        add_help=False,
    )

    # Global options
    parser.add_argument(
        "-k", "--keydir",
        default=None,
        help="Key directory",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to settings file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show help message",
    )

    # Subcommand-level --keydir must not clobber a global one
    keydir_parent = argparse.ArgumentParser(add_help=False)
    keydir_parent.add_argument("-k", "--keydir", default=argparse.SUPPRESS, help="Key directory")

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # keygen command
    keygen_parser = subparsers.add_parser("keygen", parents=[keydir_parent], help="Generate a new keypair")
    keygen_parser.add_argument("-w", "--write", action="store_true", help="Write private key to keydir")

    # encrypt command
    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt EJSON files in place")
    encrypt_parser.add_argument("files", nargs="+", help="Files to encrypt")

    # decrypt command
    decrypt_parser = subparsers.add_parser("decrypt", parents=[keydir_parent], help="Decrypt an EJSON file")
    decrypt_parser.add_argument("file", help="File to decrypt")
    decrypt_parser.add_argument("-o", "--output", help="Write decrypted JSON to this path")
    decrypt_parser.add_argument("--key-from-stdin", action="store_true", help="Read private key from stdin")

    # help command
    subparsers.add_parser("help", help="Show help message")

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on usage errors
        return 1 if e.code else 0

    # Show help if requested or no command
    if args.help or not args.command:
        return cmd_help(None, args)

    configure_logging(args.verbose, args.quiet)

    # Build context
    ctx = CLIContext(
        settings_path=args.config,
        keydir=args.keydir,
        verbose=args.verbose,
        quiet=args.quiet,
    )

    # Dispatch to command
    commands = {
        "keygen": cmd_keygen,
        "encrypt": cmd_encrypt,
        "decrypt": cmd_decrypt,
        "help": cmd_help,
    }

    cmd_func = commands.get(args.command)
    if not cmd_func:
        print_error(f"Unknown command: {args.command}")
        return 1

    try:
        return cmd_func(ctx, args)
    except KeyboardInterrupt:
        print_error("Interrupted")
        return 130
    except EJSONError as e:
        print_error(str(e))
        return 1
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
