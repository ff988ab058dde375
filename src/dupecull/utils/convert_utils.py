"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""


class ConvertUtils:
    SI_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]
    IEC_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB"]

    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def _scaled(size_bytes: int, base: int, units: list) -> str:
        if size_bytes < 1:
            return f"{size_bytes} {units[0]}"
        exponent = 0
        while exponent < len(units) - 1 and size_bytes >= base ** (exponent + 1):
            exponent += 1
        value = round(size_bytes / base ** exponent, 2)
        return f"{value:g} {units[exponent]}"

    @staticmethod
    def describe_size(size_bytes: int) -> str:
        """
        Exact byte count plus SI and IEC renderings.
        "999 B", "1048576 B (1.05 MB, 1 MiB)"
        """
        if size_bytes < 1000:
            return f"{size_bytes} B"
        return (f"{size_bytes} B ("
                f"{ConvertUtils._scaled(size_bytes, 1000, ConvertUtils.SI_UNITS)}, "
                f"{ConvertUtils._scaled(size_bytes, 1024, ConvertUtils.IEC_UNITS)})")

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1.5GB', '2048KB', '1000', '1K', '1M', '1MiB', etc.
        All units are 1024-based.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = str(size_str).strip().upper()

        units = {
            'PIB': 1024 ** 5, 'PB': 1024 ** 5, 'P': 1024 ** 5,
            'TIB': 1024 ** 4, 'TB': 1024 ** 4, 'T': 1024 ** 4,
            'GIB': 1024 ** 3, 'GB': 1024 ** 3, 'G': 1024 ** 3,
            'MIB': 1024 ** 2, 'MB': 1024 ** 2, 'M': 1024 ** 2,
            'KIB': 1024, 'KB': 1024, 'K': 1024,
            'B': 1,
        }

        # Longest suffix first so 'KIB' is not read as 'B'
        for unit in sorted(units.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * units[unit])

        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, 1MiB, etc."
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value

