"""
Прикладной слой: система бронирования и порты для инфраструктуры.
"""
