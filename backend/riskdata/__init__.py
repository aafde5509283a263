"""
Ingestion app for the Risk Data Visualizer.

This app contains:
- Database models for risk assessment rows and generic (x, y) points.
- The CSV parsing/classification helpers used by the upload view.
- API views for uploading CSV data and reading it back.
"""
