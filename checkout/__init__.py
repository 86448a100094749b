"""
Service checkout: calcul du prix côté serveur et création du PaymentIntent Stripe.
"""
