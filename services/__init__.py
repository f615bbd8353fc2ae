"""
Shipping console services

shipment_service, deactivation_service and notification_service, bound
together per signed-in user by console.ShippingConsole.
"""
