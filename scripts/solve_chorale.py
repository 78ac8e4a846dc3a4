import sys

from chorale_solver.exec.chorale_runner import main

if __name__ == "__main__":
    sys.exit(main())
