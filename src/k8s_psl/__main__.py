"""Allow ``python -m k8s_psl``."""

from k8s_psl.cli import main

if __name__ == "__main__":
    main()
