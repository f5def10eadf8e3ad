"""gal-runtime — dev launcher. Starts the backend in watch mode."""

import argparse
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13013")


def main():
    parser = argparse.ArgumentParser(description="gal-runtime dev launcher")
    parser.add_argument("--project", type=Path, default=None,
                        help="Project directory to load (default: $PROJECT_DIR)")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Settings and records directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Write the demo project to ./demo-project and serve it")
    args = parser.parse_args()

    project = args.project
    if args.demo:
        from backend.demo import create_demo_project
        project = create_demo_project(ROOT / "demo-project")
        print(f"Demo project written to {project}")

    # Build env for the subprocess so the backend picks up the same dirs
    env = os.environ.copy()
    if project:
        env["PROJECT_DIR"] = str(project.resolve())
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    procs: list[subprocess.Popen] = []

    def shutdown(*_):
        print("\nShutting down...")
        for p in procs:
            p.terminate()
        for p in procs:
            p.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    print(f"Starting backend on http://localhost:{BACKEND_PORT} ...")
    procs.append(subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "backend.app:app", "--reload",
         "--host", HOST, "--port", BACKEND_PORT],
        cwd=ROOT, env=env,
    ))

    for p in procs:
        p.wait()


if __name__ == "__main__":
    main()
