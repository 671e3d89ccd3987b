"""Task Manager package.

Feature modules (employees, tasks, payments, reports) each keep a thin Flask
controller over service and repository layers; ``container`` wires them
around one explicitly opened database handle.
"""
