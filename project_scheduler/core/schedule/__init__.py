"""Task scheduling engine.

Stages run in order for every request: dependency validation, cycle
detection, topological sort, then due-date risk and project metrics.
generate_schedule() in generate_schedule.py wires them together.
"""
