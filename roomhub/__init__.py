"""RoomHub API - Room booking back-office"""
