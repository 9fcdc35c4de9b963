"""ScaleTicket - weighbridge tickets from fiscal XML documents."""
