"""Command-line interface for otp-core."""

import argparse
import sys
from typing import Optional

from otp_core.algorithm import Algorithm
from otp_core.auth import Auth, Label, Part
from otp_core.base import Base
from otp_core.errors import OTPError
from otp_core.hotp import Hotp
from otp_core.otp import Type
from otp_core.secret import Secret
from otp_core.totp import Totp
from otp_core.values import Counter, Digits, Period, Skew


def code_command(args: argparse.Namespace) -> int:
    """Handle the code command."""
    try:
        otp = Auth.parse_url(args.url).otp
        if isinstance(otp, Totp) and args.at is not None:
            code = otp.generate_string_at(args.at)
        else:
            code = otp.generate_string()
        print(code)
        return 0
    except OTPError as e:
        print(f"✗ Failed to generate code: {e}", file=sys.stderr)
        return 1


def verify_command(args: argparse.Namespace) -> int:
    """Handle the verify command."""
    try:
        otp = Auth.parse_url(args.url).otp
        if isinstance(otp, Totp):
            otp = Totp(base=otp.base, skew=Skew(args.skew), period=otp.period)
            if args.at is None:
                valid = otp.verify_string(args.code)
            else:
                valid = otp.verify_string_at(args.at, args.code)
        else:
            valid = otp.verify_string(args.code)
    except OTPError as e:
        print(f"✗ Failed to verify code: {e}", file=sys.stderr)
        return 1

    if valid:
        print("✓ Code is valid")
        return 0
    print("✗ Code is invalid", file=sys.stderr)
    return 1


def inspect_command(args: argparse.Namespace) -> int:
    """Handle the inspect command."""
    try:
        auth = Auth.parse_url(args.url)
    except OTPError as e:
        print(f"✗ Failed to parse URL: {e}", file=sys.stderr)
        return 1

    base = auth.otp.base
    print(f"Type:      {auth.otp.type_of()}")
    print(f"User:      {auth.label.user}")
    if auth.label.issuer is not None:
        print(f"Issuer:    {auth.label.issuer}")
    print(f"Algorithm: {base.algorithm}")
    print(f"Digits:    {base.digits}")
    if isinstance(auth.otp, Hotp):
        print(f"Counter:   {auth.otp.counter}")
    else:
        print(f"Period:    {auth.otp.period}")
    return 0


def new_command(args: argparse.Namespace) -> int:
    """Handle the new command."""
    try:
        algorithm = Algorithm.parse(args.algorithm)
        base = Base(
            secret=Secret.generate_for(algorithm),
            algorithm=algorithm,
            digits=Digits(args.digits),
        )
        if Type.parse(args.type) is Type.HOTP:
            otp = Hotp(base=base, counter=Counter(args.counter))
        else:
            otp = Totp(base=base, period=Period(args.period))

        issuer = Part(args.issuer) if args.issuer is not None else None
        label = Label(user=Part(args.user), issuer=issuer)
    except OTPError as e:
        print(f"✗ Failed to create OTP: {e}", file=sys.stderr)
        return 1

    print(Auth(otp=otp, label=label).build_url())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="otp-core",
        description="HOTP/TOTP code generator and otpauth:// URL tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Code command
    code_parser = subparsers.add_parser(
        "code",
        aliases=["generate", "gen"],
        help="Print the code for an otpauth:// URL",
    )
    code_parser.add_argument("url", help="otpauth:// URL")
    code_parser.add_argument(
        "--at",
        type=int,
        default=None,
        help="Unix time to generate the TOTP code for (default: now)",
    )

    # Verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a code against an otpauth:// URL",
    )
    verify_parser.add_argument("url", help="otpauth:// URL")
    verify_parser.add_argument("code", help="Code to check")
    verify_parser.add_argument(
        "--at",
        type=int,
        default=None,
        help="Unix time to verify the TOTP code at (default: now)",
    )
    verify_parser.add_argument(
        "--skew",
        "-s",
        type=int,
        default=0,
        help="Adjacent TOTP periods to accept (default: 0)",
    )

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        aliases=["show"],
        help="Describe an otpauth:// URL without revealing the secret",
    )
    inspect_parser.add_argument("url", help="otpauth:// URL")

    # New command
    new_parser = subparsers.add_parser(
        "new",
        help="Generate a secret and print its otpauth:// URL",
    )
    new_parser.add_argument("type", choices=[t.value for t in Type], help="OTP type")
    new_parser.add_argument("user", help="Account name")
    new_parser.add_argument("--issuer", "-i", default=None, help="Issuer name")
    new_parser.add_argument(
        "--algorithm",
        "-a",
        default=Algorithm.SHA1.value,
        choices=[algorithm.value for algorithm in Algorithm],
        help="HMAC algorithm (default: SHA1)",
    )
    new_parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=Digits.DEFAULT,
        choices=[6, 7, 8],
        help="Number of digits in the code (default: 6)",
    )
    new_parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=Period.DEFAULT,
        help="TOTP period in seconds (default: 30)",
    )
    new_parser.add_argument(
        "--counter",
        "-c",
        type=int,
        default=0,
        help="Initial HOTP counter (default: 0)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command in ("code", "generate", "gen"):
        return code_command(args)
    elif args.command == "verify":
        return verify_command(args)
    elif args.command in ("inspect", "show"):
        return inspect_command(args)
    elif args.command == "new":
        return new_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
