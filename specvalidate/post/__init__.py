"""Post-processing of validation results: applying defaults and pruning data."""