"""Configuration validation, AES encryption, clocks and run-data parsing for a load-testing client."""

__version__ = "0.1.0"