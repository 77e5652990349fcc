"""
Pipeline package - composes the components into the MT analysis workflow.
"""
