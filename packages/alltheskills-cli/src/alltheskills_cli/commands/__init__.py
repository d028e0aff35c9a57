"""Command modules for the alltheskills CLI."""
