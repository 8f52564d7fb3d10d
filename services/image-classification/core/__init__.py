"""
Core modules for the image classification Lambda function.
"""
