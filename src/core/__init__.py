"""
Core Domain Layer - O Hexágono.

Lógica de negócio pura dos domínios de usuários e tickets,
sem dependência de Django. Repositórios e Unit of Work entram
por injeção; testes usam as implementações em memória de cada
módulo `ports`.
"""
