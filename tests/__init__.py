"""
Test suite for the pynoisey package.

This test suite covers:
- Import tests for all modules and submodules
- Unit tests for noise sources, modules, the grid builder and JSON assembly
- Integration tests for complete document-to-grid workflows

Run with: pytest
"""
