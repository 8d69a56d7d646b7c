# UX Glossary Source Package
"""
Estrutura modular do UX Glossary.

Módulos:
- config: Settings, constantes, exceções e logging
- domain: Modelo do registro do glossário
- infrastructure: Stores (arquivo CSV local e GitHub Contents API)
- services: Merge/upsert, consultas e orquestração
- presentation: Rotas e schemas da API
- server: App FastAPI, dependências e handlers de erro
"""
