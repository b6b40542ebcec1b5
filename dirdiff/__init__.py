"""DirDiff: compare the entries of two directories or exported listings."""

APP_NAME = "DirDiff"
APP_DISPLAY_NAME = "Dir Diff"
APP_VERSION = "0.3.0"
APP_ORGANIZATION = "DirDiff"
