"""
API Package — FastAPI Router • Models
=====================================

Contents
--------
- fast_api
    FastAPI router with endpoints for:
      • Users: register, list, read, change email, delete
      • Orders: place, list, change status, per-user total
      • Schema: generated DDL for a SQL dialect

- models
    Pydantic data contracts for request/response validation:
      • UserCreate, EmailUpdate, UserOut
      • OrderCreate, StatusUpdate, OrderOut, UserTotal
"""
