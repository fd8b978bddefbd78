import os
import subprocess
import sys

if __name__ == "__main__":
    os.environ["UPDATE_GOLDENS"] = "1"
    cmd = [sys.executable, "-m", "pytest", "-q", "tests/latticemorph/test_render_golden.py"]
    raise SystemExit(subprocess.call(cmd))
