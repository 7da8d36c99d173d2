# SPDX-License-Identifier: MIT

from hourbank.cleanup import register_cleanup
from hourbank.initialize import initialize
from hourbank.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
