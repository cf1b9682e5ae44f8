"""Derived views: read-only, human-facing views of device state.

Views never write to the store and never re-fetch mid-computation.
Each view reads one snapshot per table, derives, and renders.
Missing rows or fields degrade to defaults, never to errors.
"""
