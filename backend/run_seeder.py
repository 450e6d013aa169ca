"""Utility script to rebuild the MPFM widget catalog and production dashboard."""

import sys

from widget_seeder.cli import APP


def main() -> None:
	"""Run the ``seed`` command; the process exits non-zero when seeding fails."""
	APP(args=["seed", *sys.argv[1:]], prog_name="run_seeder")


if __name__ == "__main__":
	main()
