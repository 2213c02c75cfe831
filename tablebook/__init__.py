"""Tablebook: restaurant table reservations"""
