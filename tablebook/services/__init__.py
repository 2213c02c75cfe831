"""Booking services"""
