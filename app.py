#!/usr/bin/env python3
"""
CiSaMe Query Forge app
Main entry point for the deployed Gradio application
"""

from cisame_query.app.app import main

if __name__ == "__main__":
    main()
