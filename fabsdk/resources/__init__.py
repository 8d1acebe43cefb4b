# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Packaged build-descriptor templates (loaded via `fabsdk.helper.templates`)."""
