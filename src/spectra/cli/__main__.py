"""Run the capture backend with ``python -m spectra.cli``."""

from spectra.cli.cli import main

main()
