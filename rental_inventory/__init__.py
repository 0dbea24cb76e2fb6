"""Inventory admin service layer for a clothing rental business."""
