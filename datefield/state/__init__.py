"""
Field session state module.

Headless state holder for a single date input field: display buffer,
commit semantics and keyboard navigation.
"""
