"""Services Layer — async orchestration of repositories around the pure core.

Invariants:
    - One service class per aggregate (categories, ads, tags)
    - Each mutating method commits exactly once, after all checks pass
"""
