"""
Package entry point: python -m pagebrief
"""

import sys

from .config import ConfigValidationError
from .main import PageBriefApp


def main() -> int:
    try:
        PageBriefApp().run()
    except ConfigValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
