"""Entry point for the validated-fields demo."""

import sys

from validated_fields.app import ValidatedFieldsApp
from validated_fields.config import configure_logging, parse_args, resolve_bundles
from validated_fields.errors import ConfigError


def main() -> None:
    """Run the validated-fields demo application."""
    args = parse_args()
    configure_logging(verbose=args.verbose)
    try:
        bundles = resolve_bundles(args.preset, args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    app = ValidatedFieldsApp(bundles=bundles)
    app.run()


if __name__ == "__main__":
    main()
