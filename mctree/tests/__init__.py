"""Integration tests and scripted fake games for mctree."""
