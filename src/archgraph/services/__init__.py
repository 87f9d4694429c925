"""
Domain services for ArchGraph.

Contains the main business logic services:
- system_dependencies: Integration graph, path search and dependency diagrams
- business_capabilities: Business capability trees
"""
