# SPDX-License-Identifier: MIT
from workwatch.cli import main

if __name__ == "__main__":
    main()
