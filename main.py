#!/usr/bin/env python3
"""
Malice Bitdefender plugin entry point
"""
from bitdefender.cli import cli

if __name__ == '__main__':
    cli()
