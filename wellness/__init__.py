"""PlanAmWell wellness application.

Models, services, views and route registrations for partners, users,
doctors, reviews, orders and payments.
"""
