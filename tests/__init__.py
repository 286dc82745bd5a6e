"""
elmasker test suite.

Tests are organized by module:
- test_models: Data model validation
- test_sequence: Sequence validation and FASTA I/O
- test_scoring: Residue frequencies and occurrence scoring
- test_intervals: Overlap arithmetic and run-length encoding
- test_matcher: Motif scanning and filters
- test_masking: Coverage collapsing and masking
- test_library: Library parsing, filtering and retrieval
- test_predictors: Disorder predictor wrapper
- test_pipeline: End-to-end annotation and reports
- test_cli: Command-line interface
"""
