"""Core building blocks for Quick Analyzer."""
