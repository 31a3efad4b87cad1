"""
API Routers - Organized endpoint handlers for the GasByGas API.

Each router handles a specific domain:
- tenants: Registration, login and profile
- outlets: Outlet listing and name search
- requests: Cylinder pickup request submission and status
- tokens: Active pickup token and completed order history
- cylinders: Orderable cylinder sizes and prices
"""
