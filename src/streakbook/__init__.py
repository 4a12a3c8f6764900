# SPDX-License-Identifier: MIT

from streakbook.cleanup import register_cleanup
from streakbook.initialize import initialize
from streakbook.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
