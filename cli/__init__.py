"""Command line subcommands for rwatch."""
