"""Desktop client for the Risk Data Visualizer backend."""
