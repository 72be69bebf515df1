# SPDX-License-Identifier: MIT

from studianta.cleanup import register_cleanup
from studianta.initialize import initialize
from studianta.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
