#!/usr/bin/env python3
"""Example usage of the tibber-homes library."""

import asyncio
import os

from tibber_homes import PriceResolution, TibberClient


async def main():
    # Get the access token from the environment
    token = os.environ.get("TIBBER_ACCESS_TOKEN")

    if not token:
        print("Please set the TIBBER_ACCESS_TOKEN environment variable")
        return

    async with TibberClient(token) as client:
        print("Fetching homes...")
        homes = await client.get_homes()
        print(f"Found {len(homes)} home(s):")
        for home in homes:
            city = home.address.city if home.address else "unknown city"
            print(f"  - {home.app_nickname or home.id} ({city})")

        if not homes:
            return
        home_id = homes[0].id

        price = await client.get_current_price(home_id)
        if price is None:
            print("\nNo active subscription")
        else:
            print(
                f"\nCurrent price: {price.total:.4f} {price.currency} ({price.level})"
            )

        tomorrow = await client.get_tomorrows_prices(home_id)
        print(f"Tomorrow: {len(tomorrow)} price(s) published")

        print("\nFetching consumption for the last 24 hours...")
        readings = await client.get_consumption(home_id, PriceResolution.HOURLY, 24)
        for reading in readings[-5:]:  # Show last 5
            if reading.consumption is None:
                continue
            print(
                f"  {reading.from_time:%Y-%m-%d %H:%M}: "
                f"{reading.consumption:.2f} {reading.consumption_unit}"
            )


if __name__ == "__main__":
    asyncio.run(main())
