"""
Contract Deployment Wrapper
Runs scripts/deploy_test.py
"""

import subprocess
import sys

DEPLOY_SCRIPT = "scripts/deploy_test.py"


def main() -> int:
    result = subprocess.run(
        [sys.executable, DEPLOY_SCRIPT],
        cwd="."
    )
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
