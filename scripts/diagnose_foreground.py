"""
Prints the foreground application once per second.
Run this to check that foreground inspection works on this machine.

Expected behavior:
- Prints the executable name of whichever window you click into
- Marks lines where the foreground app differs from the protected app
"""

import sys
import os
import time
import logging

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from packages.core.monitor.foreground import WindowsForegroundInspector, protected_identity
from packages.core.monitor.inspector import InspectionError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)


def main():
    protected = protected_identity(sys.argv[1] if len(sys.argv) > 1 else "")
    inspector = WindowsForegroundInspector()

    print("=" * 60)
    print("Foreground Inspector Check")
    print(f"Protected app: {protected}")
    print("=" * 60)
    print("Switch between windows (press Ctrl+C to stop)...")
    print("-" * 60)

    try:
        sample_count = 0
        while True:
            sample_count += 1
            try:
                app = inspector.current_foreground_app()
            except InspectionError as e:
                print(f"[{sample_count:4d}] ERROR: {e}")
            else:
                away = app is None or app.casefold() != protected.casefold()
                marker = "SWITCHED AWAY" if away else "ok"
                print(f"[{sample_count:4d}] {app or '(no window)':<40} {marker}")
            time.sleep(1.0)

    except KeyboardInterrupt:
        print()
        print("-" * 60)
        print("Stopped by user")

    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
