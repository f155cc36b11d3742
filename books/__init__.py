"""
Book entity and its MongoDB repository.
"""
