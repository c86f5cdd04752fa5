"""Label generation: QR codes, label records and the providers that serve them."""
