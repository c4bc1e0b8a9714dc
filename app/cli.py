"""Admin credential utilities.

Usage:
    e-cenovnik hash-password <password>       # bcrypt hash for ADMIN_PASSWORD_HASH
    e-cenovnik hash-password <password> --rounds 12
    e-cenovnik generate-mfa                   # TOTP secret + provisioning URI
"""

import argparse
import sys

from app.core.auth import generate_mfa_secret, get_password_hash

DEFAULT_MFA_LABEL = "e-cenovnik.mk (admin)"


def cmd_hash_password(args: argparse.Namespace) -> int:
    """Print a bcrypt hash of the given password."""
    if not args.password:
        print("error: password must not be empty", file=sys.stderr)
        return 1

    print(f"Your bcrypt hash is: {get_password_hash(args.password, rounds=args.rounds)}")
    return 0


def cmd_generate_mfa(args: argparse.Namespace) -> int:
    """Print a new TOTP secret and its otpauth URI."""
    secret, uri = generate_mfa_secret(args.label, issuer=args.issuer)
    print(f"Your MFA secret (base32) is: {secret}")
    print(f"QR Code URL (optional): {uri}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="e-cenovnik", description="Admin credential utilities")
    sub = parser.add_subparsers(dest="command", required=True)

    hash_p = sub.add_parser("hash-password", help="Generate a bcrypt hash for a password")
    hash_p.add_argument("password")
    hash_p.add_argument("--rounds", type=int, default=10, help="bcrypt cost factor (default 10)")
    hash_p.set_defaults(func=cmd_hash_password)

    mfa_p = sub.add_parser("generate-mfa", help="Generate a TOTP secret for the admin account")
    mfa_p.add_argument("--label", default=DEFAULT_MFA_LABEL, help="Account label in the authenticator")
    mfa_p.add_argument("--issuer", default=None, help="Issuer name in the authenticator")
    mfa_p.set_defaults(func=cmd_generate_mfa)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
