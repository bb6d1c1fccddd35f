#!/usr/bin/env python3
import svgterminal.main

if __name__ == '__main__':
    svgterminal.main.main()
