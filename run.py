#!/usr/bin/env python3
"""Convenience runner for the Strava leaderboard scraper.

Usage:
    python run.py --segment-id 2198806
"""
import sys

from strava_leaderboard.main import main

if __name__ == "__main__":
    sys.exit(main())
