"""Routing — ordered route table with first-match-wins path matching.

Routes are registered during setup and frozen when the app starts
serving.
"""
