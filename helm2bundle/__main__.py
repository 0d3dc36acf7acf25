"""Entry point for `python -m helm2bundle`."""

from helm2bundle.tool.helm2bundle import main

if __name__ == "__main__":
    main()
