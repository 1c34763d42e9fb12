# Domain services
