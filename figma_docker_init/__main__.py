"""Allow ``python -m figma_docker_init``."""

from figma_docker_init.cli import main

if __name__ == "__main__":
    main()
