# Sample handlers used by the scanning tests
