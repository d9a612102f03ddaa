"""
Generators — produce source text from class descriptors.

Each generator module exposes a ``render_*()`` function that returns
a ``GeneratedUnit``.  Writing the unit anywhere is the caller's job.
"""
