"""Time Manager package.

Feature modules (clocks, pauses, leaves, shifts, ...) each carry a model,
a repository Protocol, a MySQL repository, a service and a thin Flask
controller. The interval rules shared by all of them live in ``intervals``.
"""
