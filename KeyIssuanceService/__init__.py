"""
Key Issuance Service Django project.
"""
