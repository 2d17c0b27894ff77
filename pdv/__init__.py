"""PDV SaaS backend"""
