"""
Command-line interface for zipfeed: the ``zipfeed`` program and the console and error handling utilities it is built on.
"""
