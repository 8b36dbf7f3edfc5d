# SPDX-License-Identifier: AGPL-3.0-only
"""Enable `python -m accname` invocation."""
from accname_cli.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
