"""Coffeeshop Manager API: accounts, staff, stock and sales with role-based access control."""
