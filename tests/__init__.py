"""
Test Suite

Tests organized by pipeline stage:
- household_power/test_loader.py — parsing, missing values, file-level failures
- household_power/test_features.py — calendar features + fixed encoding
- household_power/test_splitting.py — seeded 80/20 partition
- household_power/test_models.py — decision tree + neural net training
- household_power/test_evaluation.py — MAE / RMSE / R²
- household_power/test_pipeline_smoke.py — end-to-end on synthetic files, CLI
"""
