"""Application services for pkgrel.

Services implement the release tasks, coordinating between the core types
(core/) and infrastructure adapters (git/, platform/).
"""
