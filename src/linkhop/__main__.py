"""
LinkHop 程序入口点
"""
import os
import traceback

import typer

from linkhop.cli import app
from linkhop.utils.paths import get_crash_log_file


def main():
    try:
        app()
    except (SystemExit, KeyboardInterrupt, typer.Exit):
        raise
    except Exception:
        crash_log_file = get_crash_log_file()
        log_dir = os.path.dirname(crash_log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        with open(crash_log_file, "a", encoding="utf-8") as f:
            f.write("--- CRASH LOG ---\n")
            traceback.print_exc(file=f)

        raise


if __name__ == '__main__':
    main()
