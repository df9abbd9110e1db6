"""Meditation backend"""
